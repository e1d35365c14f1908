# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026


UTF_8 = "UTF-8"


def read_bytes(file: str) -> bytes:
  """
  Reads the binary contents of a file.

  Args:
    file: File path.

  Returns:
    Read bytes.

  Raises:
    FileNotFoundError: If the file does not exist.
    OSError: If read errors occur.
  """
  with open(file, "rb") as handler:
    return handler.read()


def read_text(file: str, encoding: str = UTF_8) -> str:
  """
  Reads a text file with a specific encoding.

  Args:
    file: File path.
    encoding: Text encoding.

  Returns:
    Read text.

  Raises:
    FileNotFoundError: If the file does not exist.
    UnicodeDecodeError: If decoding fails.
  """
  return read_bytes(file).decode(encoding)


def write_bytes(file: str, data: bytes):
  """
  Writes bytes to a file.

  Args:
    file: File path.
    data: Binary content to write.

  Raises:
    OSError: If write errors occur.
  """
  with open(file, "wb") as handler:
    handler.write(data)
