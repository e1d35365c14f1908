import json

from xlview import xlview


def test_show_prints_json(worksheet_file, capsys):
  ret = xlview.main(["show", str(worksheet_file)])

  assert ret == xlview.EXIT_OK
  data = json.loads(capsys.readouterr().out)
  assert data[0]["tabSelected"] is True
  assert data[0]["selections"][0]["sqref"] == ["A4:B4", "C6:D6", "E8:F8"]
  assert data[0]["selections"][0]["activeCellId"] is None


def test_rewrite_with_commit(worksheet_file, tmp_path):
  output = tmp_path / "out.xml"

  ret = xlview.main(["rewrite", str(worksheet_file), str(output), "--commit"])

  assert ret == xlview.EXIT_OK
  assert 'activeCellId="2"' in output.read_text(encoding="utf-8")


def test_rewrite_without_sheet_views(tmp_path):
  source = tmp_path / "sheet.xml"
  source.write_text('<worksheet><sheetData/></worksheet>', encoding="utf-8")
  output = tmp_path / "out.xml"

  assert xlview.rewrite(str(source), str(output)) == 0
  assert output.read_text(encoding="utf-8").endswith('<worksheet><sheetData/></worksheet>')


def test_missing_file(tmp_path):
  assert xlview.main(["show", str(tmp_path / "missing.xml")]) == xlview.EXIT_NOT_FOUND


def test_invalid_view_state(tmp_path):
  source = tmp_path / "sheet.xml"
  source.write_text('<worksheet><sheetViews><sheetView workbookViewId="0"><extLst/></sheetView></sheetViews></worksheet>', encoding="utf-8")

  assert xlview.main(["-v", "show", str(source)]) == xlview.EXIT_INVALID


def test_rewrite_keeps_frozen_pane_and_grid_lines(tmp_path):
  source = tmp_path / "sheet.xml"
  source.write_text(
    '<worksheet><sheetViews>'
    '<sheetView showGridLines="0" tabSelected="1" workbookViewId="0">'
    '<pane xSplit="1" ySplit="2" topLeftCell="B3" activePane="bottomRight" state="frozen"/>'
    '<selection pane="bottomRight" activeCell="B3" sqref="B3"/>'
    '</sheetView>'
    '</sheetViews><sheetData/></worksheet>', encoding="utf-8")
  output = tmp_path / "out.xml"

  assert xlview.main(["rewrite", str(source), str(output)]) == xlview.EXIT_OK

  content = output.read_text(encoding="utf-8")
  assert '<sheetView workbookViewId="0" tabSelected="1" showGridLines="0">' in content
  assert '<pane xSplit="1" ySplit="2" topLeftCell="B3" activePane="bottomRight" state="frozen"/>' in content
