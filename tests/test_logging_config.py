import logging

from xlview.logging_config import LOGGER_NAME, setup_logging


def test_repeated_setup_replaces_handlers(tmp_path):
  first_log = tmp_path / "first.log"
  logger = setup_logging(logging.DEBUG, str(first_log))
  first_file_handler = [handler for handler in logger.handlers if isinstance(handler, logging.FileHandler)][0]

  logger = setup_logging(logging.INFO)

  assert logger.name == LOGGER_NAME
  assert first_file_handler.stream is None
  assert len(logger.handlers) == 1
  assert not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)


def test_log_file_receives_messages(tmp_path):
  log_file = tmp_path / "xlview.log"
  logger = setup_logging(logging.DEBUG, str(log_file))

  logging.getLogger(LOGGER_NAME + ".xlsx.sheetview").warning("Unknown value")
  setup_logging(logging.INFO)

  content = log_file.read_text(encoding="utf-8")
  assert "Logging initialized." in content
  assert "Unknown value" in content
  assert logger.level == logging.INFO
