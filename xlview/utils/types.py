# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

from xlview.utils import text as text_util


TRUE_VALUES = ['1', 'true']
FALSE_VALUES = ['0', 'false']


def to_bool(string: str | None) -> bool | None:
  """
  Converts an XML schema boolean ('1', '0', 'true', 'false') to bool.

  Args:
    string: Value to convert.

  Returns:
    True/False, or None if the value is not a schema boolean.
  """
  if string is None:
    return None
  value = text_util.trim(str(string)).lower()
  if value in TRUE_VALUES:
    return True
  if value in FALSE_VALUES:
    return False
  return None


def from_bool(value: bool | None) -> str | None:
  """
  Converts a bool to its compact XML form ('1' / '0').
  """
  if value is None:
    return None
  return '1' if value else '0'


def merge_dicts(dict1: dict | None, dict2: dict | None) -> dict:
  """
  Merges dictionaries without overwriting existing keys.

  Args:
    dict1: Base dictionary.
    dict2: Dictionary to merge (adds only missing keys).

  Returns:
    Merged dictionary.
  """
  dict3 = {}
  if dict1:
    for item, value in dict1.items():
      dict3[item] = value
  if dict2 is not None:
    for item, value in dict2.items():
      if dict3.get(item) is None:
        dict3[item] = value
  return dict3
