import pytest

from xlview.utils.xml import XmlParser


WORKSHEET_XML = (
  '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
  '<worksheet xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main"'
  ' xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships">'
  '<dimension ref="A1:F12"/>'
  '<sheetViews>'
  '<sheetView tabSelected="1" workbookViewId="0">'
  '<pane ySplit="1" topLeftCell="A2" activePane="bottomLeft" state="frozen"/>'
  '<selection pane="bottomLeft" activeCell="E8" sqref="A4:B4 C6:D6 E8:F8"/>'
  '</sheetView>'
  '</sheetViews>'
  '<sheetFormatPr defaultRowHeight="15"/>'
  '<sheetData/>'
  '</worksheet>'
)


def parse_tag(text: str, roottag: str | None = None):
  return XmlParser().parse_string(text, roottag)


@pytest.fixture
def worksheet_file(tmp_path):
  path = tmp_path / "sheet1.xml"
  path.write_text(WORKSHEET_XML, encoding="utf-8")
  return path
