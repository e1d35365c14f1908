# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

# Worksheet view state: <sheetViews>, <sheetView>, <pane> and <selection>
import logging

from xlview.utils import types
from xlview.utils.xml import XmlParserException, XmlTag
from xlview.xlsx.reference import CellReference, format_sqref, parse_sqref

logger = logging.getLogger(__name__)

TAG_SHEET_VIEWS = 'sheetViews'
TAG_SHEET_VIEW = 'sheetView'
TAG_PANE = 'pane'
TAG_SELECTION = 'selection'

VALID_VIEW_MODES = ['normal', 'pageBreakPreview', 'pageLayout']
VALID_PANES = ['bottomRight', 'topRight', 'bottomLeft', 'topLeft']

# -- attributes held by the model, everything else is left to the worksheet
SHEET_VIEW_ATTRS = ['workbookViewId', 'tabSelected', 'view', 'zoomScale', 'zoomScaleNormal']
PANE_ATTRS = ['xSplit', 'ySplit', 'topLeftCell', 'activePane']

DEFAULT_ZOOM_SCALE = 100
DEFAULT_WORKBOOK_VIEW_ID = 0


class SheetViewException(XmlParserException):
  """
  Invalid worksheet view state.
  """
  pass


class UnexpectedTagException(SheetViewException):
  """
  Child tag not allowed below a view state tag.

  Attributes:
    tag_name: Name of the rejected child tag.
    parent_name: Name of the tag being parsed.
  """
  def __init__(self, tag_name: str, parent_name: str):
    super().__init__(f"XML tag <{tag_name} ...> not valid below <{parent_name}>")
    self.tag_name = tag_name
    self.parent_name = parent_name


def add_optional(attrs: dict, key: str, value):
  """
  Adds an attribute only when the value is present (not None).

  Args:
    attrs: Attribute map being built.
    key: Attribute name.
    value: Attribute value.
  """
  if value is not None:
    attrs[key] = value


def check_vocabulary(tag_name: str, attrname: str, value: str | None, valid: list):
  if value is not None and value not in valid:
    logger.warning("Unknown value <%s %s=\"%s\">, expected one of %s", tag_name, attrname, value, valid)


def find_active_cell_id(active_cell: CellReference | None, sqref: list | None) -> int | None:
  """
  Computes the index of the active cell in the selected ranges.

  The last range equal to the active cell wins, so duplicated ranges resolve
  like Excel writes them:
  <selection activeCell="E12" activeCellId="9" sqref="A4 B6 C8 D10 E12 A4 B6 C8 D10 E12"/>
  Without an equal range, the last range holding the cell is taken:
  <selection activeCell="E8" activeCellId="2" sqref="A4:B4 C6:D6 E8:F8"/>

  Args:
    active_cell: Focused cell.
    sqref: Selected ranges.

  Returns:
    Index, or None when there is no active cell, no match, or at most one range.
  """
  if active_cell is None or sqref is None or len(sqref) <= 1:
    return None
  equal = None
  holding = None
  for idx, ref in enumerate(sqref):
    if ref == active_cell:
      equal = idx
    elif ref.contains(active_cell):
      holding = idx
  return equal if equal is not None else holding


def _reject_children(tag: XmlTag):
  for child in tag.get_tags():
    raise UnexpectedTagException(child.name, tag.name)


class Pane:
  """
  Split or frozen pane layout of a sheet view.

  Attributes:
    x_split: Horizontal split position.
    y_split: Vertical split position.
    top_left_cell: Top left visible cell of the bottom right pane.
    active_pane: Focused pane (one of VALID_PANES).
  """
  def __init__(self, x_split: int | None = None, y_split: int | None = None,
               top_left_cell: str | None = None, active_pane: str | None = None):
    self.x_split = x_split
    self.y_split = y_split
    self.top_left_cell = top_left_cell
    self.active_pane = active_pane

  @staticmethod
  def parse(tag: XmlTag) -> "Pane":
    """
    Parses a <pane> tag. Empty attributes, as written by to_tag, read as absent.

    Args:
      tag: <pane> tag.

    Returns:
      Pane.

    Raises:
      XmlParserException: If a split is not an integer.
      UnexpectedTagException: If the tag has children.
    """
    _reject_children(tag)
    pane = Pane()
    pane.x_split = tag.get_attr_int('xSplit', True)
    pane.y_split = tag.get_attr_int('ySplit', True)
    pane.top_left_cell = tag.get_attr('topLeftCell') or None
    pane.active_pane = tag.get_attr('activePane') or None
    check_vocabulary(TAG_PANE, 'activePane', pane.active_pane, VALID_PANES)
    return pane

  def to_tag(self) -> XmlTag:
    """
    Builds the <pane> tag. All four attributes are always written.
    """
    return XmlTag(TAG_PANE, {
      'xSplit': _text(self.x_split),
      'ySplit': _text(self.y_split),
      'topLeftCell': _text(self.top_left_cell),
      'activePane': _text(self.active_pane)
    })

  def to_json(self) -> dict:
    return {
      'xSplit': self.x_split,
      'ySplit': self.y_split,
      'topLeftCell': self.top_left_cell,
      'activePane': self.active_pane
    }

  def __repr__(self) -> str:
    return f"Pane({self.to_json()!r})"


class Selection:
  """
  Selection of one pane of a sheet view.

  Attributes:
    pane: Pane the selection belongs to (one of VALID_PANES).
    active_cell: Focused cell.
    active_cell_id: 0-based index of active_cell in sqref, may be None.
    sqref: Selected cells and ranges (list of CellReference), None omits the attribute.
  """
  def __init__(self, pane: str | None = None, active_cell: CellReference | None = None,
               active_cell_id: int | None = None, sqref: list | None = None):
    self.pane = pane
    self.active_cell = active_cell
    self.active_cell_id = active_cell_id
    self.sqref = sqref

  @staticmethod
  def parse(tag: XmlTag) -> "Selection":
    """
    Parses a <selection> tag. A missing sqref gives an empty list.

    Args:
      tag: <selection> tag.

    Returns:
      Selection.

    Raises:
      ReferenceException: If activeCell or sqref hold invalid addresses.
      XmlParserException: If activeCellId is not an integer.
      UnexpectedTagException: If the tag has children.
    """
    _reject_children(tag)
    sqref = tag.get_attr('sqref')
    active_cell = tag.get_attr('activeCell')

    sel = Selection()
    sel.pane = tag.get_attr('pane')
    sel.active_cell = CellReference.parse(active_cell) if active_cell is not None else None
    sel.active_cell_id = tag.get_attr_int('activeCellId', True)
    sel.sqref = parse_sqref(sqref) if sqref is not None else []
    check_vocabulary(TAG_SELECTION, 'pane', sel.pane, VALID_PANES)
    return sel

  def resolve_active_cell_id(self) -> int | None:
    """
    Returns the stored active cell index or, when missing, the computed one.
    """
    if self.active_cell_id is not None:
      return self.active_cell_id
    return find_active_cell_id(self.active_cell, self.sqref)

  def to_tag(self, commit: bool = False) -> XmlTag:
    """
    Builds the <selection> tag.

    A missing active cell index is computed from active_cell and sqref. The
    model is left untouched unless commit is True, in which case the computed
    index is stored into active_cell_id.

    Args:
      commit: Store the computed active cell index into the model.

    Returns:
      <selection> tag.

    Raises:
      SheetViewException: If active_cell_id is out of the sqref bounds.
    """
    attrs = {}
    add_optional(attrs, 'pane', self.pane)
    add_optional(attrs, 'activeCell', _text(self.active_cell) if self.active_cell is not None else None)

    active_cell_id = self.resolve_active_cell_id()
    if active_cell_id is not None:
      # -- an empty sqref stands for the schema default "A1"
      count = len(self.sqref) if self.sqref else 1
      if active_cell_id < 0 or active_cell_id >= count:
        raise SheetViewException(f"activeCellId {active_cell_id} out of range for {count} selected ranges")
      if commit and self.active_cell_id is None:
        logger.debug("activeCellId %d stored for active cell %s", active_cell_id, self.active_cell)
        self.active_cell_id = active_cell_id
    add_optional(attrs, 'activeCellId', active_cell_id)

    if self.sqref is not None:
      attrs['sqref'] = format_sqref(self.sqref)
    return XmlTag(TAG_SELECTION, attrs)

  def to_json(self) -> dict:
    return {
      'pane': self.pane,
      'activeCell': _text(self.active_cell) if self.active_cell is not None else None,
      'activeCellId': self.active_cell_id,
      'sqref': [str(ref) for ref in self.sqref] if self.sqref is not None else None
    }

  def __repr__(self) -> str:
    return f"Selection({self.to_json()!r})"


class SheetView:
  """
  Window configuration of a worksheet (<sheetView>).

  Fields read from a document keep None for missing attributes; the zoom and
  workbook view defaults only apply to views created from scratch.

  Attributes:
    tab_selected: Whether the sheet tab is selected.
    zoom_scale: Zoom percentage.
    zoom_scale_normal: Zoom percentage for the normal view.
    workbook_view_id: Index of the workbook view (<workbookView>), always written.
    view: View mode (one of VALID_VIEW_MODES).
    pane: Pane layout or None.
    selections: Selection list in document order.
  """
  def __init__(self):
    self.tab_selected = None
    self.zoom_scale = DEFAULT_ZOOM_SCALE
    self.zoom_scale_normal = DEFAULT_ZOOM_SCALE
    self.workbook_view_id = DEFAULT_WORKBOOK_VIEW_ID
    self.view = None
    self.pane = None
    self.selections = []

  @staticmethod
  def parse(tag: XmlTag) -> "SheetView":
    """
    Parses a <sheetView> tag and its <pane> and <selection> children.

    Args:
      tag: <sheetView> tag.

    Returns:
      SheetView.

    Raises:
      UnexpectedTagException: If a child other than <pane> or <selection> is found.
      XmlParserException: If a numeric or boolean attribute is malformed.
    """
    sheetview = SheetView()
    sheetview.tab_selected = tag.get_attr_bool('tabSelected', True)
    sheetview.zoom_scale = tag.get_attr_int('zoomScale', True)
    sheetview.zoom_scale_normal = tag.get_attr_int('zoomScaleNormal', True)
    sheetview.workbook_view_id = tag.get_attr_int('workbookViewId', True)
    sheetview.view = tag.get_attr('view')
    check_vocabulary(TAG_SHEET_VIEW, 'view', sheetview.view, VALID_VIEW_MODES)

    for child in tag.get_tags():
      handler = _SHEET_VIEW_CHILDREN.get(child.name)
      if handler is None:
        raise UnexpectedTagException(child.name, tag.name)
      handler(sheetview, child)
    logger.debug("Parsed sheet view %s with %d selection(s)", sheetview.workbook_view_id, len(sheetview.selections))
    return sheetview

  def to_tag(self, commit: bool = False) -> XmlTag:
    """
    Builds the <sheetView> tag. workbookViewId is always written.

    Args:
      commit: Store computed active cell indexes into the selections.

    Returns:
      <sheetView> tag with its <pane> and <selection> children.
    """
    workbook_view_id = self.workbook_view_id
    if workbook_view_id is None:
      workbook_view_id = DEFAULT_WORKBOOK_VIEW_ID
    attrs = {'workbookViewId': workbook_view_id}
    add_optional(attrs, 'tabSelected', types.from_bool(self.tab_selected))
    add_optional(attrs, 'view', self.view)
    add_optional(attrs, 'zoomScale', self.zoom_scale)
    add_optional(attrs, 'zoomScaleNormal', self.zoom_scale_normal)

    tag = XmlTag(TAG_SHEET_VIEW, attrs)
    if self.pane is not None:
      tag.add_tag(self.pane.to_tag())
    for sel in self.selections:
      tag.add_tag(sel.to_tag(commit))
    return tag

  def add_selection(self, selection: Selection) -> Selection:
    self.selections.append(selection)
    return selection

  def get_selection(self, pane: str | None = None) -> Selection | None:
    """
    Gets the selection of a pane.

    Args:
      pane: Pane name, None for the selection without pane attribute.

    Returns:
      First matching selection or None.
    """
    for sel in self.selections:
      if sel.pane == pane:
        return sel
    return None

  def to_json(self) -> dict:
    return {
      'workbookViewId': self.workbook_view_id,
      'tabSelected': self.tab_selected,
      'view': self.view,
      'zoomScale': self.zoom_scale,
      'zoomScaleNormal': self.zoom_scale_normal,
      'pane': self.pane.to_json() if self.pane is not None else None,
      'selections': [sel.to_json() for sel in self.selections]
    }

  def __repr__(self) -> str:
    return f"SheetView({self.to_json()!r})"


def _parse_pane(sheetview: SheetView, tag: XmlTag):
  sheetview.pane = Pane.parse(tag)


def _parse_selection(sheetview: SheetView, tag: XmlTag):
  sheetview.selections.append(Selection.parse(tag))


_SHEET_VIEW_CHILDREN = {
  TAG_PANE: _parse_pane,
  TAG_SELECTION: _parse_selection,
}


class SheetViews:
  """
  The <sheetViews> block of a worksheet.

  Attributes:
    views: SheetView list in document order.
  """
  def __init__(self, views: list | None = None):
    self.views = views if views is not None else []

  @staticmethod
  def parse(tag: XmlTag) -> "SheetViews":
    """
    Parses a <sheetViews> tag.

    Args:
      tag: <sheetViews> tag.

    Returns:
      SheetViews.

    Raises:
      UnexpectedTagException: If a child other than <sheetView> is found.
    """
    sheetviews = SheetViews()
    for child in tag.get_tags():
      if child.name != TAG_SHEET_VIEW:
        raise UnexpectedTagException(child.name, tag.name)
      sheetviews.views.append(SheetView.parse(child))
    return sheetviews

  def to_tag(self, commit: bool = False) -> XmlTag:
    tag = XmlTag(TAG_SHEET_VIEWS)
    for view in self.views:
      tag.add_tag(view.to_tag(commit))
    return tag

  def get_view(self, workbook_view_id: int = DEFAULT_WORKBOOK_VIEW_ID) -> SheetView | None:
    """
    Gets the view bound to a workbook view. A view without workbookViewId
    counts as the default one.
    """
    for view in self.views:
      view_id = view.workbook_view_id if view.workbook_view_id is not None else DEFAULT_WORKBOOK_VIEW_ID
      if view_id == workbook_view_id:
        return view
    return None

  def active_view(self) -> SheetView | None:
    """
    Gets the view whose sheet tab is selected.
    """
    for view in self.views:
      if view.tab_selected:
        return view
    return None

  def to_json(self) -> list:
    return [view.to_json() for view in self.views]

  def __len__(self) -> int:
    return len(self.views)


def _text(value) -> str:
  if value is None:
    return ''
  return str(value)
