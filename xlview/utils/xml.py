# -*- coding: utf-8 -*-
# Xlview
# Author: Luis A. González
# MIT License (view LICENSE file)
# Copyright (c) 2026

import logging
import re
from abc import abstractmethod

from xlview.utils import file as file_util
from xlview.utils import text as text_util
from xlview.utils import types

logger = logging.getLogger(__name__)


class XmlException(Exception):
  """
  Base XML processing exception.
  """
  pass


class XmlParserException(XmlException):
  """
  XML parser specific exception.
  """
  pass


CONFIG_PARAM_STRICT = "STRICT"  # -- unbalanced end tags and unquoted attributes are errors
CONFIG_PARAM_INCLUDE_DECL = "INCLUDE_DECL"

XML_DECL = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# -- predefined entities and numeric character references
ENTITY_PATTERN = re.compile(r'&(#[xX][0-9a-fA-F]+|#[0-9]+|lt|gt|quot|apos|amp);')
NAMED_ENTITIES = {'lt': '<', 'gt': '>', 'quot': '"', 'apos': "'", 'amp': '&'}
# -- in attribute values, whitespace other than ' ' is written as a character reference
ATTR_ESCAPES = [('&', '&amp;'), ('<', '&lt;'), ('"', '&quot;'), ('\n', '&#10;'), ('\r', '&#13;'), ('\t', '&#9;')]


xmlWriterDefaultConfig = {
    CONFIG_PARAM_INCLUDE_DECL: False
}

xmlParserDefaultConfig = {
    CONFIG_PARAM_STRICT: True,
}


class XmlWriter:
  """
  Compact XML writer.
  """
  def __init__(self, config: dict | None = None):
    self.out = []
    self.config = types.merge_dicts(config, xmlWriterDefaultConfig) if isinstance(config, dict) else xmlWriterDefaultConfig
    if self.config[CONFIG_PARAM_INCLUDE_DECL]:
      self.out.append(XML_DECL)

  def write(self, content: str):
    self.out.append(content)

  def __str__(self) -> str:
    return ''.join(self.out)


class XmlElement:
  """
  XML element (tag or text).
  """
  def __init__(self):
    self.parent = None

  @abstractmethod
  def write(self, writer: XmlWriter):
    """
    Serializes the element.

    Args:
      writer: Output writer.
    """
    pass


class XmlText(XmlElement):
  """
  XML text node.
  """
  def __init__(self, content: str):
    super().__init__()
    self.content = content

  def append(self, text: str):
    self.content += text

  def write(self, writer: XmlWriter):
    writer.write(XmlParser.escape_entities(self.content))


class XmlTag(XmlElement):
  """
  XML tag with an ordered attribute map.

  Attributes:
    name: Tag name (with namespace prefix, if any).
    attrs: Attributes in emission order.
    elements: Child elements (tags and text nodes) in document order.
  """
  def __init__(self, tagname: str, attrs: dict | None = None):
    super().__init__()
    self.name = tagname
    self.attrs = attrs.copy() if isinstance(attrs, dict) else {}
    self.elements = []

  def get_attr(self, attrname: str) -> str | None:
    """
    Gets an attribute by name.

    Args:
      attrname: Attribute name.

    Returns:
      Attribute value or None.
    """
    return self.attrs.get(attrname)

  def get_attr_int(self, attrname: str, strict: bool = False) -> int | None:
    """
    Gets an attribute and converts it to int.

    Args:
      attrname: Attribute name.
      strict: If True, a non-numeric value is an error instead of None.

    Returns:
      Integer or None if the attribute is missing or blank.

    Raises:
      XmlParserException: If strict and the value is not an integer.
    """
    value = self.get_attr(attrname)
    if text_util.is_empty(value):
      return None
    value = text_util.trim(value)
    try:
      return int(value)
    except ValueError:
      if strict:
        raise XmlParserException(f"Integer expected for attribute <{self.name} {attrname}=\"{value}\">")
    return None

  def get_attr_bool(self, attrname: str, strict: bool = False) -> bool | None:
    """
    Gets an attribute and converts it to bool ('1', '0', 'true', 'false').

    Args:
      attrname: Attribute name.
      strict: If True, an unknown value is an error instead of None.

    Returns:
      Boolean or None if the attribute is missing or blank.

    Raises:
      XmlParserException: If strict and the value is not a boolean.
    """
    value = self.get_attr(attrname)
    if text_util.is_empty(value):
      return None
    result = types.to_bool(value)
    if result is None and strict:
      raise XmlParserException(f"Boolean expected for attribute <{self.name} {attrname}=\"{value}\">")
    return result

  def add_attr(self, attrname: str, attrvalue: str | None):
    """
    Adds or updates an attribute. New attributes go after the existing ones.

    Args:
      attrname: Attribute name.
      attrvalue: Attribute value.
    """
    self.attrs[attrname] = attrvalue

  def add_element(self, item: XmlElement) -> XmlElement:
    """
    Adds a child element.

    Args:
      item: XML element.

    Returns:
      Added element.

    Raises:
      XmlParserException: If the type is not XmlElement.
    """
    if not isinstance(item, XmlElement):
      raise XmlParserException("Invalid XML element type: " + str(type(item)))
    self.elements.append(item)
    item.parent = self
    return item

  def add_tag(self, tag: "str | XmlTag", attrs: dict | None = None) -> "XmlTag":
    """
    Creates or adds a child tag.

    Args:
      tag: Tag name or XmlTag.
      attrs: Optional attributes if tag is str.

    Returns:
      Added tag.

    Raises:
      XmlParserException: If the type is not XmlTag.
    """
    if isinstance(tag, str):
      tag = XmlTag(tag, attrs)
    if not isinstance(tag, XmlTag):
      raise XmlParserException("Invalid XML element type: " + str(type(tag)))
    self.add_element(tag)
    return tag

  def insert_element(self, idx: int, item: XmlElement) -> XmlElement:
    """
    Inserts a child element at a position of the element list.
    """
    if not isinstance(item, XmlElement):
      raise XmlParserException("Invalid XML element type: " + str(type(item)))
    self.elements.insert(idx, item)
    item.parent = self
    return item

  def replace_element(self, old: XmlElement, new: XmlElement) -> XmlElement:
    """
    Replaces a child element keeping its position.

    Args:
      old: Current child.
      new: Replacement.

    Returns:
      The replacement element.

    Raises:
      XmlParserException: If old is not a child of this tag.
    """
    for idx, elem in enumerate(self.elements):
      if elem is old:
        self.elements[idx] = new
        new.parent = self
        old.parent = None
        return new
    raise XmlParserException(f"Element is not a child of <{self.name}>")

  def add_text(self, text: str | None) -> XmlText:
    """
    Adds text as a child of the tag, merging with a previous text node.

    Args:
      text: Text.

    Returns:
      Added (or extended) text node.
    """
    text = '' if text is None else str(text)
    tags = self.elements
    last_tag = tags[len(tags) - 1] if len(tags) > 0 else None
    if last_tag and isinstance(last_tag, XmlText):
      last_tag.append(text)
      return last_tag
    return self.add_element(XmlText(text))

  def get_text(self) -> str:
    """
    Gets the concatenated text of the direct text children.
    """
    return ''.join([elem.content for elem in self.elements if isinstance(elem, XmlText)])

  def write(self, writer: XmlWriter):
    """
    Writes the tag and its content to the writer.

    Args:
      writer: Output writer.
    """
    writer.write('<' + self.name)
    for attrname, attrvalue in self.attrs.items():
      writer.write(' ' + attrname)
      if attrvalue is not None:
        writer.write('="' + XmlParser.escape_attr_value(attrvalue) + '"')
    if len(self.elements) == 0:
      writer.write('/>')
      return
    writer.write('>')
    for tag in self.elements:
      tag.write(writer)
    writer.write('</' + self.name + '>')

  def get_tag(self, tag_name: str | None = None, mandatory: bool = True) -> "XmlTag | None":
    """
    Gets the first child tag with the given name.

    Args:
      tag_name: Tag name or None for the first.
      mandatory: If True, raises if missing.

    Returns:
      Found tag or None.

    Raises:
      XmlParserException: If missing and mandatory is True.
    """
    for element in self.elements:
      if not isinstance(element, XmlTag):
        continue
      if tag_name is None or tag_name == element.name:
        return element
    if mandatory:
      ex_name = '<' + tag_name + '>' if tag_name is not None else 'XML'
      raise XmlParserException(ex_name + ' tag expected below <' + self.name + '> tag')
    return None

  def get_tags(self, tag_name: str | None = None) -> list:
    """
    Gets all child tags with the given name (text nodes are skipped).

    Args:
      tag_name: Tag name or None for all.

    Returns:
      List of XmlTag.
    """
    tags = []
    for block in self.elements:
      if not isinstance(block, XmlTag):
        continue
      if tag_name is not None and block.name != tag_name:
        continue
      tags.append(block)
    return tags

  def __repr__(self) -> str:
    return f"XmlTag({self.name!r}, {self.attrs!r})"


class XmlParser:
  """
  XML parser keeping the parsed root tag for a later write back.

  Attributes:
    config: Parser configuration (see xmlParserDefaultConfig).
    pathfile: File parsed by parse_file, target of write_file.
    root_tag: Last parsed root tag.
  """

  def __init__(self, config: dict | None = None):
    self.config = types.merge_dicts(config, xmlParserDefaultConfig) if isinstance(config, dict) else xmlParserDefaultConfig
    self.pathfile = None
    self.root_tag = None

  def parse_file(self, pathfile: str, roottag: str | None = None) -> XmlTag:
    """
    Parses an XML file and returns the root tag.

    Args:
      pathfile: XML file path.
      roottag: Expected root tag name.

    Returns:
      Parsed root tag.

    Raises:
      FileNotFoundError: If the file does not exist.
      XmlParserException: If XML is invalid or root mismatch.
    """
    logger.debug("Parsing XML file %s", pathfile)
    content = file_util.read_text(pathfile, file_util.UTF_8)
    block = self.parse_string(content, roottag)
    self.pathfile = pathfile
    return block

  def parse_string(self, content: str, roottag: str | None = None) -> XmlTag:
    """
    Parses an XML document from text and returns the root tag.

    Args:
      content: XML text (declaration allowed).
      roottag: Expected root tag name.

    Returns:
      Parsed root tag.

    Raises:
      XmlParserException: If XML is invalid or root mismatch.
    """
    blocks = self.parse_text(text_util.trim(content))
    tags = [block for block in blocks if isinstance(block, XmlTag)]
    if len(tags) < 1:
      raise XmlParserException("None XML tag defined")
    block = tags[0]
    if roottag and block.name != roottag:
      raise XmlParserException("XML root tag <" + roottag + " ...> was expected at start. Found <" + block.name + "> tag")
    block.parent = None
    self.root_tag = block
    return block

  def parse_text(self, text: str) -> list:
    """
    Parses XML from text.

    Args:
      text: XML text.

    Returns:
      List of parsed top level elements.

    Raises:
      XmlParserException: If the content is invalid.
    """
    root = XmlTag('#root')
    self.__parse_tags(root, text, 0)
    return root.elements

  def __parse_tags(self, parent_tag: XmlTag, row: str, idx: int) -> int:
    config_strict = self.config[CONFIG_PARAM_STRICT]
    opentag = parent_tag.name
    while idx < len(row):
      idx0 = idx
      idx = row.find('<', idx0)
      if idx < 0:
        # -- text as the rest of the doc
        _add_text(parent_tag, row[idx0:])
        idx = len(row)
        break
      text = row[idx0:idx]
      # -- comments, declarations and processing instructions
      if row.startswith('<!--', idx):
        idx2 = row.find('-->', idx + 4)
        if idx2 < 0:
          XmlParser.__raise_xml_parse_exception(row, idx, "Comment end mark '-->' not found")
        _add_text(parent_tag, text)
        idx = idx2 + 3
        continue
      if row.startswith('<?', idx) or row.startswith('<!', idx):
        idx2 = row.find('>', idx)
        if idx2 < 0:
          XmlParser.__raise_xml_parse_exception(row, idx, "End of declaration mark '>' not found")
        _add_text(parent_tag, text)
        idx = idx2 + 1
        continue
      endtag = idx + 1 < len(row) and row[idx + 1] == '/'
      start = idx + 2 if endtag else idx + 1
      if start >= len(row) or not (text_util.is_alpha(row[start]) or row[start] == '_'):
        if config_strict:
          XmlParser.__raise_xml_parse_exception(row, idx, "Invalid tag start mark")
        # -- '<' taken as plain text
        _add_text(parent_tag, text + '<')
        idx += 1
        continue
      # -- tag name
      idx = start
      while idx < len(row) and row[idx] != '>' and row[idx] != '/' and not text_util.is_space(row[idx]):
        idx += 1
      tag_name = row[start:idx]
      idx2 = row.find('>', idx)
      if idx2 < 0:
        XmlParser.__raise_xml_parse_exception(row, start, f"End of tag mark expected: <{tag_name}...?")
      autoendtag = row[idx2 - 1] == '/'
      if endtag and autoendtag:
        XmlParser.__raise_xml_parse_exception(row, start, f"Invalid autoend tag for tag end: </{tag_name}/?")
      tag = XmlTag(tag_name)
      if not endtag:
        self.__parse_attrs(tag, row, idx, idx2)
      idx = idx2 + 1
      _add_text(parent_tag, text)
      if endtag:
        # -- end of the tag we are into, return
        if tag_name == opentag:
          return idx
        if config_strict:
          XmlParser.__raise_xml_parse_exception(row, start, f"Invalid tag end </{tag_name}> without tag start. Expected </{opentag}>")
        # -- stray end tag, ignored
        continue
      parent_tag.add_tag(tag)
      if autoendtag:
        continue
      idx = self.__parse_tags(tag, row, idx)
    if config_strict and opentag != '#root':
      XmlParser.__raise_xml_parse_exception(row, len(row) - 1, f"Tag end </{opentag}> expected")
    return idx

  def __parse_attrs(self, tag: XmlTag, row: str, idx: int, idx2: int):
    config_strict = self.config[CONFIG_PARAM_STRICT]
    tag_name = tag.name
    while idx < idx2:
      while idx < idx2 and text_util.is_space(row[idx]):
        idx += 1
      # -- attribute name
      idx0 = idx
      while idx < idx2 and row[idx] not in ['=', '/', '>'] and not text_util.is_space(row[idx]):
        idx += 1
      attr_name = row[idx0:idx]
      if attr_name == '':
        break
      if attr_name.find('"') >= 0 or attr_name.find("'") >= 0:
        XmlParser.__raise_xml_parse_exception(row, idx, f"Invalid attr name: <{tag_name} {attr_name}...")
      while idx < idx2 and text_util.is_space(row[idx]):
        idx += 1
      # -- skip the equals sign and take the value
      if idx >= idx2 or row[idx] != '=':
        if config_strict:
          XmlParser.__raise_xml_parse_exception(row, idx, f"Equals sign expected for attr: <{tag_name} {attr_name}=?...")
        tag.add_attr(attr_name, None)
        continue
      idx += 1
      while idx < idx2 and text_util.is_space(row[idx]):
        idx += 1
      quote = row[idx] if idx < idx2 else ''
      if quote != '"' and quote != "'":
        XmlParser.__raise_xml_parse_exception(row, idx, f"Quote expected around attribute from tag. Found '{quote}' char: <{tag_name} {attr_name}=?>")
      idx0 = idx + 1
      idx = row.find(quote, idx0, idx2)
      if idx < 0:
        XmlParser.__raise_xml_parse_exception(row, idx0, f"Closing quote expected: <{tag_name} {attr_name}={quote}...")
      tag.add_attr(attr_name, XmlParser.resolve_entities(row[idx0:idx]))
      idx += 1


  def write_file(self, pathfile: str | None = None, config: dict | None = None):
    """
    Writes the root XML tag (with XML declaration) to a file.

    Args:
      pathfile: Target file. Defaults to the parsed file.
      config: Writer configuration merged over output with declaration.

    Raises:
      XmlException: If there is no root tag or target file.
      OSError: If the file cannot be written.
    """
    pathfile = pathfile or self.pathfile
    if not pathfile or not self.root_tag:
      raise XmlException("Nothing to write: no parsed root tag or target file")
    writer = XmlWriter(types.merge_dicts(config, {
      CONFIG_PARAM_INCLUDE_DECL: True
    }))
    self.root_tag.write(writer)
    file_util.write_bytes(pathfile, str(writer).encode(file_util.UTF_8))
    logger.debug("XML file written: %s", pathfile)

  @staticmethod
  def __calc_number_of_line(row: str, idx: int):
    if idx >= len(row):
      idx = len(row) - 1
    return row.count('\n', 0, idx + 1) + 1

  @staticmethod
  def __raise_xml_parse_exception(row: str, idx: int, message: str):
    line = XmlParser.__calc_number_of_line(row, idx)
    raise XmlParserException(f"[line: {line}] {message}")

  @staticmethod
  def get_outer_xml(tag: XmlTag, config: dict | None = None) -> str:
    """
    Serializes a full tag to XML.

    Args:
      tag: Tag to serialize.
      config: Writer configuration (no declaration by default).

    Returns:
      Generated XML.
    """
    out = XmlWriter(config)
    tag.write(out)
    return str(out)

  @staticmethod
  def escape_entities(row: str | None) -> str:
    """
    Escapes basic XML entities of text content.

    Args:
      row: Input text.

    Returns:
      Escaped text.
    """
    if row is None:
      return ''
    row = row.replace('&', '&amp;')
    row = row.replace('<', '&lt;')
    row = row.replace('>', '&gt;')
    return row

  @staticmethod
  def escape_attr_value(row) -> str:
    """
    Escapes an attribute value. Line breaks and tabs become character references.

    Args:
      row: Attribute value (numbers are converted to text).

    Returns:
      Escaped value.
    """
    row = str(row)
    for char, entity in ATTR_ESCAPES:
      row = row.replace(char, entity)
    return row

  @staticmethod
  def resolve_entities(row: str) -> str:
    """
    Resolves the predefined entities and the numeric character references
    (&#10;, &#xA;) in one pass, so '&amp;#10;' gives the literal text '&#10;'.

    Args:
      row: Input text.

    Returns:
      Text with resolved entities.

    Raises:
      XmlParserException: If a character reference is out of the Unicode range.
    """
    return ENTITY_PATTERN.sub(_resolve_entity, row)


def _resolve_entity(match: re.Match) -> str:
  name = match.group(1)
  if name[0] != '#':
    return NAMED_ENTITIES[name]
  code = int(name[2:], 16) if name[1] in 'xX' else int(name[1:])
  try:
    return chr(code)
  except (ValueError, OverflowError):
    raise XmlParserException(f"Invalid character reference '{match.group(0)}'")


def _add_text(parent_tag: XmlTag, text: str | None):
  if text is None or text == '':
    return
  parent_tag.add_text(XmlParser.resolve_entities(text))
