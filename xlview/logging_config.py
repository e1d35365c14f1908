# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

import logging
import sys

LOGGER_NAME = "xlview"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
  """
  Configures the logger of the 'xlview' namespace.

  Args:
    level: Logging level (e.g. logging.DEBUG, logging.INFO).
    log_file: Optional path to also save logs to a file.

  Returns:
    The configured package logger.
  """
  logger = logging.getLogger(LOGGER_NAME)
  logger.setLevel(level)

  # -- avoid duplicated handlers on repeated setup, releasing open log files
  for handler in list(logger.handlers):
    logger.removeHandler(handler)
    handler.close()

  formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
  )

  console_handler = logging.StreamHandler(sys.stderr)
  console_handler.setLevel(level)
  console_handler.setFormatter(formatter)
  logger.addHandler(console_handler)

  if log_file:
    file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

  logger.debug("Logging initialized.")
  return logger
