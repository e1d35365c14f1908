"""Xlview CLI entrypoint.

Reads the view state (<sheetViews>) of a worksheet part, prints it as JSON or
writes the worksheet back with the view state re-serialized.
"""

import argparse
import json
import logging
import os
import sys

from xlview.logging_config import setup_logging
from xlview.utils.xml import XmlParserException
from xlview.xlsx.worksheet import Worksheet

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = -1
EXIT_INVALID = -2


def show(worksheet_file: str) -> str:
  """Return the view state of a worksheet file as JSON text."""
  worksheet = Worksheet(worksheet_file)
  sheetviews = worksheet.get_sheet_views()
  data = sheetviews.to_json() if sheetviews is not None else []
  return json.dumps(data, indent=2)


def rewrite(worksheet_file: str, output_file: str, commit: bool = False) -> int:
  """Re-serialize the <sheetViews> block of a worksheet into output_file.

  Returns the number of rewritten sheet views.
  """
  worksheet = Worksheet(worksheet_file)
  sheetviews = worksheet.get_sheet_views()
  if sheetviews is None:
    logger.info("No <sheetViews> found in %s", worksheet_file)
    worksheet.write(output_file)
    return 0
  worksheet.set_sheet_views(sheetviews, commit)
  worksheet.write(output_file)
  logger.info("Rewritten %d sheet view(s) into %s", len(sheetviews), output_file)
  return len(sheetviews)


def _build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="xlview",
    description="Worksheet view state reader/writer"
  )
  parser.add_argument(
    "-v", "--verbose",
    action="store_true",
    help="Enable verbose output"
  )
  parser.add_argument(
    "--log-file",
    default=None,
    help="Also write the log to this file"
  )
  commands = parser.add_subparsers(dest="command", required=True)

  show_parser = commands.add_parser("show", help="Print the worksheet view state as JSON")
  show_parser.add_argument("worksheet", help="Worksheet XML file (xl/worksheets/sheetN.xml)")

  rewrite_parser = commands.add_parser("rewrite", help="Write the worksheet with its view state re-serialized")
  rewrite_parser.add_argument("worksheet", help="Worksheet XML file (xl/worksheets/sheetN.xml)")
  rewrite_parser.add_argument("output", help="Output worksheet XML file")
  rewrite_parser.add_argument(
    "--commit",
    action="store_true",
    help="Store computed activeCellId values into the view state before writing"
  )
  return parser


def main(argv: list | None = None) -> int:
  """CLI entrypoint for xlview."""
  args = _build_parser().parse_args(argv)
  setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

  worksheet_file = os.path.abspath(args.worksheet)
  logger.debug("Worksheet: %s", worksheet_file)
  try:
    if args.command == "show":
      print(show(worksheet_file))
    else:
      rewrite(worksheet_file, os.path.abspath(args.output), args.commit)
  except FileNotFoundError as e:
    logger.error("File not found: %s", e.filename or e)
    return EXIT_NOT_FOUND
  except XmlParserException as e:
    logger.error("Invalid worksheet %s: %s", worksheet_file, e)
    return EXIT_INVALID
  return EXIT_OK


if __name__ == "__main__":
  sys.exit(main())
