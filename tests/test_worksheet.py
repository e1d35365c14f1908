import pytest

from xlview.utils.xml import XmlParserException
from xlview.xlsx.reference import CellReference
from xlview.xlsx.sheetview import Selection, SheetView, SheetViews
from xlview.xlsx.worksheet import Worksheet

from conftest import WORKSHEET_XML


def test_read_sheet_views(worksheet_file):
  worksheet = Worksheet(str(worksheet_file))

  sheetviews = worksheet.get_sheet_views()

  assert len(sheetviews) == 1
  view = sheetviews.active_view()
  assert view.pane.y_split == 1
  assert view.pane.active_pane == "bottomLeft"
  assert view.selections[0].active_cell == CellReference.parse("E8")


def test_replace_sheet_views_in_place():
  worksheet = Worksheet(content=WORKSHEET_XML)
  sheetviews = worksheet.get_sheet_views()

  worksheet.set_sheet_views(sheetviews, commit=True)

  names = [tag.name for tag in worksheet.root_tag.get_tags()]
  assert names == ["dimension", "sheetViews", "sheetFormatPr", "sheetData"]
  assert sheetviews.views[0].selections[0].active_cell_id == 2
  assert '<selection pane="bottomLeft" activeCell="E8" activeCellId="2" sqref="A4:B4 C6:D6 E8:F8"/>' in worksheet.to_xml()


def test_replace_keeps_attributes_outside_the_model():
  worksheet = Worksheet(content=(
    '<worksheet><sheetViews>'
    '<sheetView showGridLines="0" rightToLeft="1" zoomScale="80" workbookViewId="0">'
    '<pane ySplit="1" topLeftCell="A2" activePane="bottomLeft" state="frozen"/>'
    '</sheetView>'
    '<sheetView workbookViewId="1"/>'
    '</sheetViews></worksheet>'))
  sheetviews = worksheet.get_sheet_views()
  sheetviews.views[0].zoom_scale = 120
  sheetviews.views[1].pane = None

  worksheet.set_sheet_views(sheetviews)

  views = worksheet.root_tag.get_tag("sheetViews").get_tags("sheetView")
  assert list(views[0].attrs) == ["workbookViewId", "zoomScale", "showGridLines", "rightToLeft"]
  assert views[0].get_attr("zoomScale") == 120
  assert views[0].get_tag("pane").attrs == {
    "xSplit": "", "ySplit": "1", "topLeftCell": "A2", "activePane": "bottomLeft", "state": "frozen"}
  assert views[1].attrs == {"workbookViewId": 1}


def test_insert_sheet_views_after_dimension():
  worksheet = Worksheet(content='<worksheet><sheetPr/><dimension ref="A1"/><sheetData/></worksheet>')
  assert worksheet.get_sheet_views() is None
  view = SheetView()
  view.add_selection(Selection(active_cell=CellReference.parse("A1"), sqref=[CellReference.parse("A1")]))

  worksheet.set_sheet_views(SheetViews([view]))

  names = [tag.name for tag in worksheet.root_tag.get_tags()]
  assert names == ["sheetPr", "dimension", "sheetViews", "sheetData"]


def test_insert_sheet_views_first_without_predecessors():
  worksheet = Worksheet(content='<worksheet><sheetData/></worksheet>')

  worksheet.set_sheet_views(SheetViews([SheetView()]))

  assert [tag.name for tag in worksheet.root_tag.get_tags()] == ["sheetViews", "sheetData"]


def test_write_and_reload(worksheet_file, tmp_path):
  worksheet = Worksheet(str(worksheet_file))
  worksheet.set_sheet_views(worksheet.get_sheet_views(), commit=True)
  output = tmp_path / "out.xml"

  worksheet.write(str(output))

  content = output.read_text(encoding="utf-8")
  assert content.startswith('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')
  reloaded = Worksheet(str(output)).get_sheet_views()
  assert reloaded.views[0].selections[0].active_cell_id == 2
  assert reloaded.views[0].pane.top_left_cell == "A2"


def test_not_a_worksheet():
  with pytest.raises(XmlParserException):
    Worksheet(content='<workbook/>')


def test_missing_file(tmp_path):
  with pytest.raises(FileNotFoundError):
    Worksheet(str(tmp_path / "missing.xml"))
