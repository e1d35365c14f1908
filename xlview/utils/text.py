# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

WHITESPACE = ' \t\r\n'


def trim(string: str|None) -> str:
  """
  Trims spaces and line breaks from both ends.

  Args:
    string: Text to clean.

  Returns:
    Text without leading/trailing whitespace ('' for None).
  """
  if string is None or not isinstance(string, str) or len(string) == 0:
    return ''
  if string[0] == '\uFEFF':
    string = string[1:]
  return string.strip(WHITESPACE)


def is_empty(value: any) -> bool:
  """
  Checks whether a value is empty (None or empty string after trim).

  Args:
    value: Value to evaluate.

  Returns:
    True if empty.
  """
  return value is None or trim(str(value)) == ''


def is_space(char: str) -> bool:
  return char != '' and char in WHITESPACE


def is_alpha(text: str) -> bool:
  """
  Checks whether a text contains only A-Z letters.

  Args:
    text: Text to evaluate.

  Returns:
    True if the trimmed text is alphabetic, False otherwise.
  """
  text = trim(text)
  if is_empty(text):
    return False
  for char in text:
    if (char < 'a' or char > 'z') and (char < 'A' or char > 'Z'):
      return False
  return True


def is_digits(text: str) -> bool:
  """
  Checks whether a text contains only 0-9 digits (no sign, no decimal point).

  Args:
    text: Text to evaluate.

  Returns:
    True if every character is a decimal digit.
  """
  if text is None or len(text) == 0:
    return False
  for char in text:
    if char < '0' or char > '9':
      return False
  return True


def split_no_empty(string: str, sep: str) -> list:
  """
  Splits a string and removes empty elements.

  Args:
    string: String to split.
    sep: Separator.

  Returns:
    List of non-empty elements with trim applied.
  """
  slist = string.split(sep)
  olist = []
  for item in slist:
    if item == '':
      continue
    olist.append(item.strip())
  return olist
