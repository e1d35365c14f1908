# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

# Worksheet part (xl/worksheets/sheetN.xml) view state access
import logging

from xlview.utils.xml import XmlParser, XmlTag
from xlview.xlsx.sheetview import PANE_ATTRS, SHEET_VIEW_ATTRS, SheetViews, TAG_PANE, TAG_SHEET_VIEW, TAG_SHEET_VIEWS

logger = logging.getLogger(__name__)

TAG_WORKSHEET = 'worksheet'
# -- tags that go before <sheetViews> in a worksheet
SHEET_VIEWS_PREDECESSORS = ['sheetPr', 'dimension']


class Worksheet(XmlParser):
  """
  Represents a worksheet (worksheet.xml) and its <sheetViews> block.

  Attributes:
    root_tag: <worksheet> tag.
  """
  def __init__(self, pathfile: str | None = None, content: str | None = None):
    """
    Loads a worksheet from a file or from XML text.

    Args:
      pathfile: worksheet.xml path.
      content: worksheet XML text, used when pathfile is None.

    Raises:
      FileNotFoundError: If the file does not exist.
      XmlParserException: If the XML is invalid or the root is not <worksheet>.
    """
    super().__init__()
    if pathfile:
      self.parse_file(pathfile, TAG_WORKSHEET)
    elif content is not None:
      self.parse_string(content, TAG_WORKSHEET)
    else:
      self.root_tag = XmlTag(TAG_WORKSHEET)

  def get_sheet_views(self) -> SheetViews | None:
    """
    Parses the <sheetViews> block.

    Returns:
      SheetViews or None if the worksheet has no such block.

    Raises:
      UnexpectedTagException: If the block holds unknown tags.
    """
    tag = self.root_tag.get_tag(TAG_SHEET_VIEWS, False)
    if tag is None:
      return None
    return SheetViews.parse(tag)

  def set_sheet_views(self, sheetviews: SheetViews, commit: bool = False) -> XmlTag:
    """
    Replaces the <sheetViews> block, or inserts it after <sheetPr>/<dimension>.

    Attributes of the replaced <sheetView> and <pane> tags that the model does
    not hold (showGridLines, state, ...) are kept, matching views by position.

    Args:
      sheetviews: New view state.
      commit: Store computed active cell indexes into the selections.

    Returns:
      The written <sheetViews> tag.
    """
    new_tag = sheetviews.to_tag(commit)
    old_tag = self.root_tag.get_tag(TAG_SHEET_VIEWS, False)
    if old_tag is not None:
      _keep_unmodelled_attrs(old_tag, new_tag)
      return self.root_tag.replace_element(old_tag, new_tag)
    idx = 0
    for pos, elem in enumerate(self.root_tag.elements):
      if isinstance(elem, XmlTag) and elem.name in SHEET_VIEWS_PREDECESSORS:
        idx = pos + 1
    logger.debug("Inserting <%s> at position %d", TAG_SHEET_VIEWS, idx)
    return self.root_tag.insert_element(idx, new_tag)

  def write(self, pathfile: str | None = None):
    """
    Writes the worksheet.

    Args:
      pathfile: Output file, defaults to the loaded one.

    Raises:
      XmlException: If there is no target file.
      OSError: If the file cannot be written.
    """
    self.write_file(pathfile)

  def to_xml(self) -> str:
    return XmlParser.get_outer_xml(self.root_tag)


def _copy_attrs(old_tag: XmlTag, new_tag: XmlTag, modelled: list):
  for attrname, attrvalue in old_tag.attrs.items():
    if attrname not in modelled and attrname not in new_tag.attrs:
      new_tag.add_attr(attrname, attrvalue)


def _keep_unmodelled_attrs(old_views: XmlTag, new_views: XmlTag):
  for old_view, new_view in zip(old_views.get_tags(TAG_SHEET_VIEW), new_views.get_tags(TAG_SHEET_VIEW)):
    _copy_attrs(old_view, new_view, SHEET_VIEW_ATTRS)
    old_pane = old_view.get_tag(TAG_PANE, False)
    new_pane = new_view.get_tag(TAG_PANE, False)
    if old_pane is not None and new_pane is not None:
      _copy_attrs(old_pane, new_pane, PANE_ATTRS)
