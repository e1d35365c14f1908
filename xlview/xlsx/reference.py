# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

# SpreadsheetML cell and range addresses (A1, C6:D6, A:C, 3:5)
from xlview.utils import text as text_util
from xlview.utils.xml import XmlParserException


MAX_COLUMN = 16384  # -- XFD
MAX_ROW = 1048576


class ReferenceException(XmlParserException):
  """
  Invalid cell or range reference.
  """
  pass


def get_cell_alphas(rvalue: str) -> str:
  """
  Extracts the leading alphabetic part of a cell reference.

  Args:
    rvalue: Cell reference.

  Returns:
    Column letters.
  """
  if rvalue is None:
    return ''
  idx = 0
  while idx < len(rvalue) and text_util.is_alpha(rvalue[idx]):
    idx += 1
  return rvalue[0:idx]


def get_column_num(letters: str) -> int:
  """
  Converts column letters to a column number.

  Args:
    letters: Column letters (e.g., 'C', 'AB').

  Returns:
    Column number (1-based), 0 for empty letters.
  """
  value = 0
  for char in letters.upper():
    value = value * 26 + (ord(char) - ord('A') + 1)
  return value


def get_column_letters(cell: int) -> str:
  """
  Converts a column number to its letters.

  Args:
    cell: Column number (1-based).

  Returns:
    Column letters ('' for 0).
  """
  chars = ''
  while cell > 0:
    cell, rest = divmod(cell - 1, 26)
    chars = chr(65 + rest) + chars
  return chars


def get_cell_format_position(cell: int, row: int) -> str:
  """
  Converts column and row to a cell address. A zero component is left out.

  Args:
    cell: Column number (1-based) or 0.
    row: Row number (1-based) or 0.

  Returns:
    Address like 'B2', 'B' or '2'.
  """
  return get_column_letters(cell) + (str(row) if row > 0 else '')


def parse_cell(rvalue: str) -> tuple[int, int]:
  """
  Parses one address component ('B2', '$B$2', 'B', '2').

  Args:
    rvalue: Address component.

  Returns:
    Tuple (column, row), 0 for a missing part.

  Raises:
    ReferenceException: If the text is not an address.
  """
  value = rvalue.replace('$', '')
  letters = get_cell_alphas(value)
  digits = value[len(letters):]
  if letters == '' and digits == '':
    raise ReferenceException(f"Invalid cell reference '{rvalue}'")
  if digits != '' and not text_util.is_digits(digits):
    raise ReferenceException(f"Invalid cell reference '{rvalue}'")
  col = get_column_num(letters)
  row = int(digits) if digits != '' else 0
  if col > MAX_COLUMN:
    raise ReferenceException(f"Column out of range in cell reference '{rvalue}'")
  if digits != '' and (row < 1 or row > MAX_ROW):
    raise ReferenceException(f"Row out of range in cell reference '{rvalue}'")
  return col, row


class CellReference:
  """
  A cell ('B2') or a range ('C6:D6', 'A:C', '3:5') of a worksheet.

  A zero column means "whole row" and a zero row means "whole column".

  Attributes:
    first_col: First column (1-based, 0 for whole rows).
    first_row: First row (1-based, 0 for whole columns).
    last_col: Last column, None for a single cell.
    last_row: Last row, None for a single cell.
  """
  def __init__(self, first_col: int, first_row: int, last_col: int | None = None, last_row: int | None = None):
    self.first_col = first_col
    self.first_row = first_row
    self.last_col = last_col
    self.last_row = last_row

  @staticmethod
  def parse(ref: str) -> "CellReference":
    """
    Parses an address.

    Args:
      ref: Address like 'A4', 'A4:B4', '$A$4', 'A:A' or '4:4'.

    Returns:
      CellReference.

    Raises:
      ReferenceException: If the address is invalid.
    """
    if text_util.is_empty(ref):
      raise ReferenceException("Empty cell reference")
    ref = text_util.trim(ref)
    idx = ref.find(':')
    if idx < 0:
      col, row = parse_cell(ref)
      if col == 0 or row == 0:
        raise ReferenceException(f"Cell reference '{ref}' needs column and row")
      return CellReference(col, row)
    if idx == 0 or idx == len(ref) - 1 or ref.find(':', idx + 1) >= 0:
      raise ReferenceException(f"Invalid range reference '{ref}'")
    col1, row1 = parse_cell(ref[0:idx])
    col2, row2 = parse_cell(ref[idx + 1:])
    if (col1 == 0) != (col2 == 0) or (row1 == 0) != (row2 == 0):
      raise ReferenceException(f"Mixed range reference '{ref}'")
    return CellReference(col1, row1, col2, row2)

  @property
  def is_range(self) -> bool:
    return self.last_col is not None

  def bounds(self) -> tuple[int, int, int, int]:
    """
    Returns the covered rectangle as (min_col, min_row, max_col, max_row).
    """
    last_col = self.last_col if self.is_range else self.first_col
    last_row = self.last_row if self.is_range else self.first_row
    col1, col2 = min(self.first_col, last_col), max(self.first_col, last_col)
    row1, row2 = min(self.first_row, last_row), max(self.first_row, last_row)
    if col1 == 0:
      col1, col2 = 1, MAX_COLUMN
    if row1 == 0:
      row1, row2 = 1, MAX_ROW
    return col1, row1, col2, row2

  def contains(self, other: "CellReference") -> bool:
    """
    Tells whether other lies completely inside this reference.

    Args:
      other: Cell or range.

    Returns:
      True if covered.
    """
    col1, row1, col2, row2 = self.bounds()
    ocol1, orow1, ocol2, orow2 = other.bounds()
    return col1 <= ocol1 and ocol2 <= col2 and row1 <= orow1 and orow2 <= row2

  def _key(self) -> tuple:
    return self.first_col, self.first_row, self.last_col, self.last_row

  def __eq__(self, other) -> bool:
    if not isinstance(other, CellReference):
      return NotImplemented
    return self._key() == other._key()

  def __hash__(self) -> int:
    return hash(self._key())

  def __str__(self) -> str:
    out = get_cell_format_position(self.first_col, self.first_row)
    if self.is_range:
      out += ':' + get_cell_format_position(self.last_col, self.last_row)
    return out

  def __repr__(self) -> str:
    return f"CellReference('{self}')"


def parse_sqref(sqref: str) -> list:
  """
  Parses a space separated list of addresses.

  Args:
    sqref: Text like 'A4:B4 C6:D6'.

  Returns:
    List of CellReference in document order.
  """
  return [CellReference.parse(item) for item in text_util.split_no_empty(sqref, ' ')]


def format_sqref(refs: list) -> str:
  """
  Renders a list of references as a space separated list.
  """
  return ' '.join([str(ref) for ref in refs])
