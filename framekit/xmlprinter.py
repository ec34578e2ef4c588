"""Serializes a document tree, or direct calls, as XML text."""

from __future__ import annotations

from typing import Any, TextIO

from framekit.xmlnodes import (
    XMLAttribute,
    XMLComment,
    XMLDeclaration,
    XMLElement,
    XMLText,
    XMLUnknown,
    XMLVisitor,
)
from framekit.xmlutil import ENTITIES, to_str

__all__ = ["XMLPrinter"]

_INDENT = "    "
_ENTITY_BY_CHAR = {value: f"&{pattern};" for pattern, value in ENTITIES}
_RESTRICTED_CHARS = frozenset("&<>")
_ALL_ENTITY_CHARS = frozenset(_ENTITY_BY_CHAR)


def _as_text(value: str | bool | int | float) -> str:
    return value if isinstance(value, str) else to_str(value)


class XMLPrinter(XMLVisitor):
    """Writes XML either to a text stream or to an internal buffer.

    Used as a visitor it prints a whole tree; its ``push_*`` and
    ``open_element``/``close_element`` methods build output directly.
    Unless ``compact`` is set, nested elements are placed on their own
    lines and indented by four spaces per level.
    """

    def __init__(self, stream: TextIO | None = None, compact: bool = False, depth: int = 0) -> None:
        self._stream = stream
        self._buffer: list[str] = []
        self._compact = compact
        self._depth = depth
        self._text_depth = -1
        self._element_just_opened = False
        self._first_element = True
        self._process_entities = True
        self._stack: list[str] = []

    # -- output --------------------------------------------------------

    def _write(self, data: str) -> None:
        if self._stream is not None:
            self._stream.write(data)
        else:
            self._buffer.append(data)

    def text(self) -> str:
        """Everything written so far when no stream was given."""
        return "".join(self._buffer)

    def compact_mode(self, element: XMLElement) -> bool:
        """Whether children of ``element`` are printed without layout."""
        return self._compact

    def _print_space(self, depth: int) -> None:
        self._write(_INDENT * depth)

    def _print_string(self, text: str, restricted: bool) -> None:
        if not self._process_entities:
            self._write(text)
            return
        special = _RESTRICTED_CHARS if restricted else _ALL_ENTITY_CHARS
        self._write("".join(_ENTITY_BY_CHAR[ch] if ch in special else ch for ch in text))

    def _seal_element_if_just_opened(self) -> None:
        if self._element_just_opened:
            self._element_just_opened = False
            self._write(">")

    def _layout_break(self) -> None:
        if self._text_depth < 0 and not self._first_element and not self._compact:
            self._write("\n")
            self._print_space(self._depth)

    # -- building ------------------------------------------------------

    def push_header(self, write_bom: bool, write_dec: bool) -> None:
        """Write a byte order mark and/or a standard XML declaration."""
        if write_bom:
            self._write("\ufeff")
        if write_dec:
            self.push_declaration('xml version="1.0"')

    def open_element(self, name: str, compact_mode: bool = False) -> None:
        """Start an element; attributes may follow until content is pushed."""
        self._seal_element_if_just_opened()
        self._stack.append(name)
        if self._text_depth < 0 and not self._first_element and not compact_mode:
            self._write("\n")
        if not compact_mode:
            self._print_space(self._depth)
        self._write("<" + name)
        self._element_just_opened = True
        self._first_element = False
        self._depth += 1

    def push_attribute(self, name: str, value: str | bool | int | float) -> None:
        """Add an attribute to the element just opened."""
        if not self._element_just_opened:
            raise ValueError("attributes can only follow an opened element")
        self._write(" " + name + '="')
        self._print_string(_as_text(value), False)
        self._write('"')

    def close_element(self, compact_mode: bool = False) -> None:
        """Close the most recently opened element."""
        if not self._stack:
            raise ValueError("no element is open")
        self._depth -= 1
        name = self._stack.pop()
        if self._element_just_opened:
            self._write("/>")
        else:
            if self._text_depth < 0 and not compact_mode:
                self._write("\n")
                self._print_space(self._depth)
            self._write("</" + name + ">")
        if self._text_depth == self._depth:
            self._text_depth = -1
        if self._depth == 0 and not compact_mode:
            self._write("\n")
        self._element_just_opened = False

    def push_text(self, text: str | bool | int | float, cdata: bool = False) -> None:
        """Write text content, escaped or as a CDATA section."""
        self._text_depth = self._depth - 1
        self._seal_element_if_just_opened()
        value = _as_text(text)
        if cdata:
            self._write("<![CDATA[" + value + "]]>")
        else:
            self._print_string(value, True)

    def push_comment(self, comment: str) -> None:
        self._seal_element_if_just_opened()
        self._layout_break()
        self._first_element = False
        self._write("<!--" + comment + "-->")

    def push_declaration(self, value: str) -> None:
        self._seal_element_if_just_opened()
        self._layout_break()
        self._first_element = False
        self._write("<?" + value + "?>")

    def push_unknown(self, value: str) -> None:
        self._seal_element_if_just_opened()
        self._layout_break()
        self._first_element = False
        self._write("<!" + value + ">")

    # -- visiting ------------------------------------------------------

    def visit_enter_document(self, document: Any) -> bool:
        self._process_entities = bool(getattr(document, "process_entities", True))
        if getattr(document, "has_bom", False):
            self.push_header(True, False)
        return True

    def visit_exit_document(self, document: Any) -> bool:
        return True

    def visit_enter_element(self, element: XMLElement, attributes: list[XMLAttribute]) -> bool:
        parent = element.parent
        if isinstance(parent, XMLElement):
            compact = self.compact_mode(parent)
        else:
            compact = self._compact
        self.open_element(element.name, compact)
        for attribute in attributes:
            self.push_attribute(attribute.name, attribute.value)
        return True

    def visit_exit_element(self, element: XMLElement) -> bool:
        self.close_element(self.compact_mode(element))
        return True

    def visit_text(self, text: XMLText) -> bool:
        self.push_text(text.value, text.cdata)
        return True

    def visit_comment(self, comment: XMLComment) -> bool:
        self.push_comment(comment.value)
        return True

    def visit_declaration(self, declaration: XMLDeclaration) -> bool:
        self.push_declaration(declaration.value)
        return True

    def visit_unknown(self, unknown: XMLUnknown) -> bool:
        self.push_unknown(unknown.value)
        return True