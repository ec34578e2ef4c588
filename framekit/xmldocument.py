"""XML document: parsing text and files into a node tree, and writing it back."""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any

from framekit.xmlnodes import (
    XMLComment,
    XMLDeclaration,
    XMLElement,
    XMLNode,
    XMLText,
    XMLUnknown,
    XMLVisitor,
)
from framekit.xmlprinter import XMLPrinter
from framekit.xmlutil import (
    TextFlags,
    Whitespace,
    XMLError,
    XMLException,
    error_id_to_name,
    is_name_char,
    is_name_start_char,
    is_whitespace,
    process_text,
)

__all__ = ["XMLDocument"]

_DEFAULT_DECLARATION = 'xml version="1.0" encoding="UTF-8"'


class _Closing(Enum):
    OPEN = 0
    CLOSED = 1
    CLOSING = 2


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", "replace")


class _Parser:
    """Recursive descent over one text buffer, filling a document."""

    def __init__(self, document: XMLDocument, text: str) -> None:
        self.doc = document
        self.text = text
        self.size = len(text)
        self.line = 1

    # -- low level -----------------------------------------------------

    def skip_ws(self, pos: int) -> int:
        text = self.text
        while pos < self.size and is_whitespace(text[pos]):
            if text[pos] == "\n":
                self.line += 1
            pos += 1
        return pos

    def parse_text(self, pos: int, end_tag: str) -> tuple[str, int] | None:
        found = self.text.find(end_tag, pos)
        if found < 0:
            return None
        self.line += self.text.count("\n", pos, found)
        return self.text[pos:found], found + len(end_tag)

    def parse_name(self, pos: int) -> tuple[str, int] | None:
        text = self.text
        if pos >= self.size or not is_name_start_char(text[pos]):
            return None
        end = pos + 1
        while end < self.size and is_name_char(text[end]):
            end += 1
        return text[pos:end], end

    # -- structure -----------------------------------------------------

    def identify(self, pos: int) -> tuple[XMLNode | None, int]:
        start, start_line = pos, self.line
        pos = self.skip_ws(pos)
        if pos >= self.size:
            return None, pos
        line_here = self.line
        text, doc = self.text, self.doc
        node: XMLNode
        if text.startswith("<?", pos):
            node, pos = XMLDeclaration(doc), pos + 2
        elif text.startswith("<!--", pos):
            node, pos = XMLComment(doc), pos + 4
        elif text.startswith("<![CDATA[", pos):
            node, pos = XMLText(doc, "", True), pos + 9
        elif text.startswith("<!", pos):
            node, pos = XMLUnknown(doc), pos + 2
        elif text.startswith("<", pos):
            node, pos = XMLElement(doc), pos + 1
        else:
            node = XMLText(doc)
            pos, self.line = start, start_line
        node.parse_line_num = line_here
        return node, pos

    def parse_children(self, parent: XMLNode, pos: int) -> tuple[int | None, str | None]:
        """Parse siblings until a closing tag (returned) or a failure/end (None)."""
        doc = self.doc
        while pos < self.size:
            node, pos = self.identify(pos)
            if node is None:
                break
            initial_line = node.parse_line_num
            closing: _Closing | None = None
            end_tag: str | None = None
            if isinstance(node, XMLElement):
                new_pos, closing, end_tag = self.parse_element(node, pos)
            else:
                new_pos = self.parse_leaf(node, pos)
            if new_pos is None:
                if not doc.error:
                    doc._set_error(XMLError.ERROR_PARSING, initial_line)
                break
            pos = new_pos

            if isinstance(node, XMLDeclaration):
                well_located = parent is doc and all(
                    isinstance(existing, XMLDeclaration) for existing in doc.children()
                )
                if not well_located:
                    doc._set_error(
                        XMLError.ERROR_PARSING_DECLARATION,
                        initial_line,
                        f"XMLDeclaration value={node.value}",
                    )
                    break

            if isinstance(node, XMLElement):
                if closing is _Closing.CLOSING:
                    return pos, node.name
                if end_tag is None:
                    mismatch = closing is _Closing.OPEN
                else:
                    mismatch = closing is not _Closing.OPEN or end_tag != node.name
                if mismatch:
                    doc._set_error(
                        XMLError.ERROR_MISMATCHED_ELEMENT,
                        initial_line,
                        f"XMLElement name={node.name}",
                    )
                    break
            parent.insert_end_child(node)
        return None, None

    def parse_element(
        self, element: XMLElement, pos: int
    ) -> tuple[int | None, _Closing, str | None]:
        pos = self.skip_ws(pos)
        closing = _Closing.OPEN
        if pos < self.size and self.text[pos] == "/":
            closing = _Closing.CLOSING
            pos += 1
        named = self.parse_name(pos)
        if named is None:
            return None, closing, None
        element.name, pos = named
        result = self.parse_attributes(element, pos, closing)
        if result is None:
            return None, closing, None
        pos, closing = result
        if pos >= self.size or closing is not _Closing.OPEN:
            return pos, closing, None
        new_pos, end_tag = self.parse_children(element, pos)
        return new_pos, closing, end_tag

    def parse_attributes(
        self, element: XMLElement, pos: int, closing: _Closing
    ) -> tuple[int, _Closing] | None:
        doc, text = self.doc, self.text
        while True:
            pos = self.skip_ws(pos)
            if pos >= self.size:
                doc._set_error(
                    XMLError.ERROR_PARSING_ELEMENT,
                    element.parse_line_num,
                    f"XMLElement name={element.name}",
                )
                return None
            ch = text[pos]
            if is_name_start_char(ch):
                attr_line = self.line
                parsed = self.parse_attribute(pos)
                if parsed is None or element.find_attribute(parsed[0]) is not None:
                    doc._set_error(
                        XMLError.ERROR_PARSING_ATTRIBUTE,
                        attr_line,
                        f"XMLElement name={element.name}",
                    )
                    return None
                name, value, pos = parsed
                element.set_attribute(name, value)
                element.find_attribute(name).parse_line_num = attr_line  # type: ignore[union-attr]
            elif ch == ">":
                return pos + 1, closing
            elif text.startswith("/>", pos):
                return pos + 2, _Closing.CLOSED
            else:
                doc._set_error(XMLError.ERROR_PARSING_ELEMENT, element.parse_line_num)
                return None

    def parse_attribute(self, pos: int) -> tuple[str, str, int] | None:
        named = self.parse_name(pos)
        if named is None:
            return None
        name, pos = named
        if pos >= self.size:
            return None
        pos = self.skip_ws(pos)
        if pos >= self.size or self.text[pos] != "=":
            return None
        pos = self.skip_ws(pos + 1)
        if pos >= self.size or self.text[pos] not in "\"'":
            return None
        quote = self.text[pos]
        parsed = self.parse_text(pos + 1, quote)
        if parsed is None:
            return None
        raw, pos = parsed
        flags = (
            TextFlags.ATTRIBUTE_VALUE
            if self.doc.process_entities
            else TextFlags.ATTRIBUTE_VALUE_LEAVE_ENTITIES
        )
        return name, process_text(raw, flags), pos

    def parse_leaf(self, node: XMLNode, pos: int) -> int | None:
        doc = self.doc
        if isinstance(node, XMLText):
            if node.cdata:
                return self._leaf(node, pos, "]]>", TextFlags.NEEDS_NEWLINE_NORMALIZATION,
                                  XMLError.ERROR_PARSING_CDATA)
            flags = (
                TextFlags.TEXT_ELEMENT
                if doc.process_entities
                else TextFlags.TEXT_ELEMENT_LEAVE_ENTITIES
            )
            if doc.whitespace_mode is Whitespace.COLLAPSE:
                flags |= TextFlags.NEEDS_WHITESPACE_COLLAPSING
            end = self._leaf(node, pos, "<", flags, XMLError.ERROR_PARSING_TEXT)
            if end is not None and end < self.size:
                return end - 1
            return None
        if isinstance(node, XMLComment):
            return self._leaf(node, pos, "-->", TextFlags.COMMENT, XMLError.ERROR_PARSING_COMMENT)
        if isinstance(node, XMLDeclaration):
            return self._leaf(node, pos, "?>", TextFlags.NEEDS_NEWLINE_NORMALIZATION,
                              XMLError.ERROR_PARSING_DECLARATION)
        return self._leaf(node, pos, ">", TextFlags.NEEDS_NEWLINE_NORMALIZATION,
                          XMLError.ERROR_PARSING_UNKNOWN)

    def _leaf(
        self, node: XMLNode, pos: int, end_tag: str, flags: TextFlags, error: XMLError
    ) -> int | None:
        parsed = self.parse_text(pos, end_tag)
        if parsed is None:
            self.doc._set_error(error, node.parse_line_num)
            return None
        raw, end = parsed
        node.set_value(process_text(raw, flags))
        return end


class XMLDocument(XMLNode):
    """Root of a tree; parses, creates nodes for, and serializes XML.

    Parse and file failures raise :class:`XMLException`; the last error
    also stays available through ``error_id``, ``error_str`` and friends.
    """

    def __init__(
        self,
        process_entities: bool = True,
        whitespace_mode: Whitespace = Whitespace.PRESERVE,
    ) -> None:
        super().__init__(None)
        self.document = self
        self.process_entities = process_entities
        self.whitespace_mode = whitespace_mode
        self.has_bom = False
        self._error: XMLException | None = None

    @property
    def value(self) -> str | None:
        """A document has no value."""
        return None

    # -- error state ---------------------------------------------------

    def _set_error(self, error: XMLError, line: int = 0, detail: str | None = None) -> None:
        self._error = XMLException(error, line, detail)

    def _fail(self, error: XMLError, line: int = 0, detail: str | None = None) -> None:
        self._set_error(error, line, detail)
        raise self._error  # type: ignore[misc]

    @property
    def error(self) -> bool:
        return self._error is not None

    @property
    def error_id(self) -> XMLError:
        return XMLError.SUCCESS if self._error is None else self._error.error

    @property
    def error_line_num(self) -> int:
        return 0 if self._error is None else self._error.line_number

    @property
    def error_str(self) -> str:
        return "" if self._error is None else self._error.error_str

    @property
    def error_name(self) -> str:
        return error_id_to_name(self.error_id)

    # -- loading and saving --------------------------------------------

    def clear(self) -> None:
        """Remove all children and forget any error."""
        self.delete_children()
        self._error = None

    def parse(self, text: str | bytes) -> None:
        """Replace the content with the tree parsed from ``text``."""
        self.clear()
        if isinstance(text, (bytes, bytearray)):
            text = _decode(text)
        if not text or text[0] == "\0":
            self._fail(XMLError.ERROR_EMPTY_DOCUMENT)
        self._parse_buffer(text)

    def _parse_buffer(self, text: str) -> None:
        text = text.split("\0", 1)[0]
        parser = _Parser(self, text)
        self.parse_line_num = 1
        pos = parser.skip_ws(0)
        self.has_bom = text.startswith("\ufeff", pos)
        if self.has_bom:
            pos += 1
        if pos >= len(text):
            self._fail(XMLError.ERROR_EMPTY_DOCUMENT)
        parser.parse_children(self, pos)
        if self._error is not None:
            self.delete_children()
            raise self._error

    def load_file(self, path: str | os.PathLike[str]) -> None:
        """Parse the file at ``path``."""
        self.clear()
        try:
            handle = open(path, "rb")
        except OSError:
            self._fail(XMLError.ERROR_FILE_NOT_FOUND, 0, f"filename={os.fspath(path)}")
        with handle:
            try:
                data = handle.read()
            except OSError:
                self._fail(XMLError.ERROR_FILE_READ_ERROR)
        if not data:
            self._fail(XMLError.ERROR_EMPTY_DOCUMENT)
        self._parse_buffer(_decode(data))

    def save_file(self, path: str | os.PathLike[str], compact: bool = False) -> None:
        """Write the document to ``path`` as UTF-8."""
        self._error = None
        try:
            handle = open(path, "w", encoding="utf-8")
        except OSError:
            self._fail(
                XMLError.ERROR_FILE_COULD_NOT_BE_OPENED, 0, f"filename={os.fspath(path)}"
            )
        with handle:
            self.accept(XMLPrinter(handle, compact))

    def print(self, printer: XMLPrinter | None = None) -> None:
        """Send the document to ``printer``, or to standard output."""
        self.accept(printer if printer is not None else XMLPrinter(sys.stdout))

    def to_string(self, compact: bool = False) -> str:
        """Return the document as XML text."""
        printer = XMLPrinter(compact=compact)
        self.accept(printer)
        return printer.text()

    # -- building ------------------------------------------------------

    def deep_copy(self, target: XMLDocument) -> None:
        """Replace the content of ``target`` with a copy of this document."""
        if target is self:
            return
        target.clear()
        for node in self.children():
            clone = node.deep_clone(target)
            if clone is not None:
                target.insert_end_child(clone)

    def new_element(self, name: str) -> XMLElement:
        return XMLElement(self, name)

    def new_comment(self, text: str) -> XMLComment:
        return XMLComment(self, text)

    def new_text(self, text: str) -> XMLText:
        return XMLText(self, text)

    def new_declaration(self, text: str | None = None) -> XMLDeclaration:
        return XMLDeclaration(self, text if text is not None else _DEFAULT_DECLARATION)

    def new_unknown(self, text: str) -> XMLUnknown:
        return XMLUnknown(self, text)

    def accept(self, visitor: XMLVisitor | Any) -> bool:
        if visitor.visit_enter_document(self):
            for node in self.children():
                if not node.accept(visitor):
                    break
        return visitor.visit_exit_document(self)