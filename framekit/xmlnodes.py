"""Document object model for XML: nodes, attributes, elements and visitors."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from framekit.xmlutil import (
    XMLError,
    XMLException,
    to_bool,
    to_double,
    to_float,
    to_int,
    to_int64,
    to_str,
    to_unsigned,
)

__all__ = [
    "XMLVisitor",
    "XMLNode",
    "XMLText",
    "XMLComment",
    "XMLDeclaration",
    "XMLUnknown",
    "XMLAttribute",
    "XMLElement",
]


def _as_text(value: str | bool | int | float) -> str:
    return value if isinstance(value, str) else to_str(value)


class XMLVisitor:
    """Callbacks for walking a tree; every hook returns True to keep going."""

    def visit_enter_document(self, document: Any) -> bool:
        return True

    def visit_exit_document(self, document: Any) -> bool:
        return True

    def visit_enter_element(self, element: XMLElement, attributes: list[XMLAttribute]) -> bool:
        return True

    def visit_exit_element(self, element: XMLElement) -> bool:
        return True

    def visit_text(self, text: XMLText) -> bool:
        return True

    def visit_comment(self, comment: XMLComment) -> bool:
        return True

    def visit_declaration(self, declaration: XMLDeclaration) -> bool:
        return True

    def visit_unknown(self, unknown: XMLUnknown) -> bool:
        return True


class XMLNode:
    """A node in a document tree, holding an ordered list of children."""

    def __init__(self, document: Any = None) -> None:
        self.document = document
        self.parent: XMLNode | None = None
        self._value = ""
        self._children: list[XMLNode] = []
        self.parse_line_num = 0
        self.user_data: Any = None

    # -- value ---------------------------------------------------------

    @property
    def value(self) -> str | None:
        """The node's text: element name, text content, comment body and so on."""
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value

    # -- navigation ----------------------------------------------------

    def children(self) -> Iterator[XMLNode]:
        """Iterate over a snapshot of the children, in order."""
        return iter(list(self._children))

    @property
    def no_children(self) -> bool:
        return not self._children

    @property
    def first_child(self) -> XMLNode | None:
        return self._children[0] if self._children else None

    @property
    def last_child(self) -> XMLNode | None:
        return self._children[-1] if self._children else None

    def _siblings(self) -> tuple[list[XMLNode], int]:
        if self.parent is None:
            return [], -1
        siblings = self.parent._children
        return siblings, siblings.index(self)

    @property
    def previous_sibling(self) -> XMLNode | None:
        siblings, index = self._siblings()
        return siblings[index - 1] if index > 0 else None

    @property
    def next_sibling(self) -> XMLNode | None:
        siblings, index = self._siblings()
        return siblings[index + 1] if 0 <= index < len(siblings) - 1 else None

    # -- structure -----------------------------------------------------

    def _check_document(self, node: XMLNode) -> None:
        if node.document is not self.document:
            raise ValueError("node belongs to a different document")

    def _detach(self, node: XMLNode) -> None:
        if node.parent is not None:
            node.parent.unlink(node)

    def insert_end_child(self, node: XMLNode) -> XMLNode:
        """Append ``node`` as the last child, moving it from any old parent."""
        self._check_document(node)
        self._detach(node)
        self._children.append(node)
        node.parent = self
        return node

    def insert_first_child(self, node: XMLNode) -> XMLNode:
        """Insert ``node`` as the first child, moving it from any old parent."""
        self._check_document(node)
        self._detach(node)
        self._children.insert(0, node)
        node.parent = self
        return node

    def insert_after_child(self, after: XMLNode, node: XMLNode) -> XMLNode:
        """Insert ``node`` directly after the child ``after``."""
        self._check_document(node)
        if after.parent is not self:
            raise ValueError("reference node is not a child of this node")
        if after is node:
            return node
        if self._children[-1] is after:
            return self.insert_end_child(node)
        self._detach(node)
        self._children.insert(self._children.index(after) + 1, node)
        node.parent = self
        return node

    def unlink(self, child: XMLNode) -> None:
        """Remove ``child`` from this node without discarding it."""
        if child.parent is not self:
            raise ValueError("node is not a child of this node")
        self._children.remove(child)
        child.parent = None

    def delete_child(self, node: XMLNode) -> None:
        """Remove ``node`` and its subtree from this node."""
        self.unlink(node)
        node.delete_children()

    def delete_children(self) -> None:
        for child in list(self._children):
            self.delete_child(child)

    # -- element lookup ------------------------------------------------

    @staticmethod
    def _element_named(node: XMLNode, name: str | None) -> XMLElement | None:
        if isinstance(node, XMLElement) and (name is None or node.name == name):
            return node
        return None

    def _first_element(self, nodes: list[XMLNode], name: str | None) -> XMLElement | None:
        for node in nodes:
            element = self._element_named(node, name)
            if element is not None:
                return element
        return None

    def first_child_element(self, name: str | None = None) -> XMLElement | None:
        return self._first_element(self._children, name)

    def last_child_element(self, name: str | None = None) -> XMLElement | None:
        return self._first_element(self._children[::-1], name)

    def next_sibling_element(self, name: str | None = None) -> XMLElement | None:
        siblings, index = self._siblings()
        return self._first_element(siblings[index + 1:] if index >= 0 else [], name)

    def previous_sibling_element(self, name: str | None = None) -> XMLElement | None:
        siblings, index = self._siblings()
        return self._first_element(siblings[:index][::-1] if index > 0 else [], name)

    # -- copying and comparison ----------------------------------------

    def deep_clone(self, target: Any = None) -> XMLNode | None:
        """Copy this node and its whole subtree into ``target`` (default: own document)."""
        clone = self.shallow_clone(target)
        if clone is None:
            return None
        for child in self._children:
            child_clone = child.deep_clone(target)
            if child_clone is not None:
                clone.insert_end_child(child_clone)
        return clone

    def shallow_clone(self, document: Any = None) -> XMLNode | None:
        """Copy this node without children; a bare node has no copy."""
        return None

    def shallow_equal(self, other: XMLNode) -> bool:
        """Compare this node alone with ``other``; a bare node equals nothing."""
        return False

    def accept(self, visitor: XMLVisitor) -> bool:
        """Walk the children in order, stopping when one declines."""
        for child in list(self._children):
            if not child.accept(visitor):
                break
        return True


class _LeafNode(XMLNode):
    _visit: Callable[[XMLVisitor, Any], bool]

    def __init__(self, document: Any = None, value: str = "") -> None:
        super().__init__(document)
        self._value = value

    def _target(self, document: Any) -> Any:
        return self.document if document is None else document

    def shallow_clone(self, document: Any = None) -> XMLNode:
        return type(self)(self._target(document), self._value)

    def shallow_equal(self, other: XMLNode) -> bool:
        return isinstance(other, type(self)) and other.value == self.value


class XMLText(_LeafNode):
    """Character data; ``cdata`` marks text written as a CDATA section."""

    def __init__(self, document: Any = None, value: str = "", cdata: bool = False) -> None:
        super().__init__(document, value)
        self.cdata = cdata

    def shallow_clone(self, document: Any = None) -> XMLText:
        return XMLText(self._target(document), self._value, self.cdata)

    def shallow_equal(self, other: XMLNode) -> bool:
        return isinstance(other, XMLText) and other.value == self.value

    def accept(self, visitor: XMLVisitor) -> bool:
        return visitor.visit_text(self)


class XMLComment(_LeafNode):
    """A comment."""

    def __init__(self, document: Any = None, value: str = "") -> None:
        super().__init__(document, value)

    def shallow_clone(self, document: Any = None) -> XMLComment:
        return XMLComment(self._target(document), self._value)

    def shallow_equal(self, other: XMLNode) -> bool:
        return isinstance(other, XMLComment) and other.value == self.value

    def accept(self, visitor: XMLVisitor) -> bool:
        return visitor.visit_comment(self)


class XMLDeclaration(_LeafNode):
    """A processing declaration such as ``<?xml ...?>``."""

    def __init__(self, document: Any = None, value: str = "") -> None:
        super().__init__(document, value)

    def shallow_clone(self, document: Any = None) -> XMLDeclaration:
        return XMLDeclaration(self._target(document), self._value)

    def shallow_equal(self, other: XMLNode) -> bool:
        return isinstance(other, XMLDeclaration) and other.value == self.value

    def accept(self, visitor: XMLVisitor) -> bool:
        return visitor.visit_declaration(self)


class XMLUnknown(_LeafNode):
    """Any ``<!...>`` construct kept verbatim, such as a DTD."""

    def __init__(self, document: Any = None, value: str = "") -> None:
        super().__init__(document, value)

    def shallow_clone(self, document: Any = None) -> XMLUnknown:
        return XMLUnknown(self._target(document), self._value)

    def shallow_equal(self, other: XMLNode) -> bool:
        return isinstance(other, XMLUnknown) and other.value == self.value

    def accept(self, visitor: XMLVisitor) -> bool:
        return visitor.visit_unknown(self)


def _query(convert: Callable[[str], Any], text: str, error: XMLError) -> Any:
    try:
        return convert(text)
    except ValueError:
        raise XMLException(error) from None


class XMLAttribute:
    """A name/value pair attached to an element."""

    def __init__(self, name: str, value: str | bool | int | float = "") -> None:
        self.name = name
        self.value = _as_text(value)
        self.parse_line_num = 0

    def set_attribute(self, value: str | bool | int | float) -> None:
        self.value = _as_text(value)

    def _query(self, convert: Callable[[str], Any]) -> Any:
        return _query(convert, self.value, XMLError.WRONG_ATTRIBUTE_TYPE)

    def query_int_value(self) -> int:
        return self._query(to_int)

    def query_unsigned_value(self) -> int:
        return self._query(to_unsigned)

    def query_int64_value(self) -> int:
        return self._query(to_int64)

    def query_bool_value(self) -> bool:
        return self._query(to_bool)

    def query_float_value(self) -> float:
        return self._query(to_float)

    def query_double_value(self) -> float:
        return self._query(to_double)

    def __repr__(self) -> str:
        return f"XMLAttribute({self.name!r}, {self.value!r})"


class XMLElement(XMLNode):
    """An element with a name, ordered attributes and children."""

    def __init__(self, document: Any = None, name: str = "") -> None:
        super().__init__(document)
        self._value = name
        self._attributes: list[XMLAttribute] = []

    @property
    def name(self) -> str:
        return self._value

    @name.setter
    def name(self, name: str) -> None:
        self._value = name

    # -- attributes ----------------------------------------------------

    def attributes(self) -> list[XMLAttribute]:
        """The attributes in document order."""
        return list(self._attributes)

    def find_attribute(self, name: str) -> XMLAttribute | None:
        return next((a for a in self._attributes if a.name == name), None)

    def attribute(self, name: str, value: str | None = None) -> str | None:
        """Return the attribute's value, or None if missing or not equal to ``value``."""
        found = self.find_attribute(name)
        if found is None:
            return None
        if value is None or found.value == value:
            return found.value
        return None

    def _attribute_or(self, name: str, convert: Callable[[str], Any], default: Any) -> Any:
        found = self.find_attribute(name)
        if found is None:
            return default
        try:
            return convert(found.value)
        except ValueError:
            return default

    def int_attribute(self, name: str, default: int = 0) -> int:
        return self._attribute_or(name, to_int, default)

    def unsigned_attribute(self, name: str, default: int = 0) -> int:
        return self._attribute_or(name, to_unsigned, default)

    def int64_attribute(self, name: str, default: int = 0) -> int:
        return self._attribute_or(name, to_int64, default)

    def bool_attribute(self, name: str, default: bool = False) -> bool:
        return self._attribute_or(name, to_bool, default)

    def double_attribute(self, name: str, default: float = 0.0) -> float:
        return self._attribute_or(name, to_double, default)

    def float_attribute(self, name: str, default: float = 0.0) -> float:
        return self._attribute_or(name, to_float, default)

    def set_attribute(self, name: str, value: str | bool | int | float) -> None:
        """Set an attribute, appending it when it does not exist yet."""
        found = self.find_attribute(name)
        if found is None:
            self._attributes.append(XMLAttribute(name, value))
        else:
            found.set_attribute(value)

    def delete_attribute(self, name: str) -> None:
        found = self.find_attribute(name)
        if found is not None:
            self._attributes.remove(found)

    # -- text ----------------------------------------------------------

    def _text_node(self) -> XMLText | None:
        first = self.first_child
        return first if isinstance(first, XMLText) else None

    def get_text(self) -> str:
        """Text of the first child when it is a text node, else an empty string."""
        node = self._text_node()
        return node.value if node is not None else ""

    def set_text(self, value: str | bool | int | float) -> None:
        """Replace the leading text node, or insert one at the front."""
        text = _as_text(value)
        node = self._text_node()
        if node is not None:
            node.set_value(text)
        else:
            self.insert_first_child(XMLText(self.document, text))

    def _query_text(self, convert: Callable[[str], Any]) -> Any:
        node = self._text_node()
        if node is None:
            raise XMLException(XMLError.NO_TEXT_NODE)
        return _query(convert, node.value, XMLError.CAN_NOT_CONVERT_TEXT)

    def query_int_text(self) -> int:
        return self._query_text(to_int)

    def query_unsigned_text(self) -> int:
        return self._query_text(to_unsigned)

    def query_int64_text(self) -> int:
        return self._query_text(to_int64)

    def query_bool_text(self) -> bool:
        return self._query_text(to_bool)

    def query_double_text(self) -> float:
        return self._query_text(to_double)

    def query_float_text(self) -> float:
        return self._query_text(to_float)

    def _text_or(self, convert: Callable[[str], Any], default: Any) -> Any:
        try:
            return self._query_text(convert)
        except XMLException:
            return default

    def int_text(self, default: int = 0) -> int:
        return self._text_or(to_int, default)

    def unsigned_text(self, default: int = 0) -> int:
        return self._text_or(to_unsigned, default)

    def int64_text(self, default: int = 0) -> int:
        return self._text_or(to_int64, default)

    def bool_text(self, default: bool = False) -> bool:
        return self._text_or(to_bool, default)

    def double_text(self, default: float = 0.0) -> float:
        return self._text_or(to_double, default)

    def float_text(self, default: float = 0.0) -> float:
        return self._text_or(to_float, default)

    # -- copying, comparison, visiting ---------------------------------

    def shallow_clone(self, document: Any = None) -> XMLElement:
        element = XMLElement(self.document if document is None else document, self.name)
        for attr in self._attributes:
            element.set_attribute(attr.name, attr.value)
        return element

    def shallow_equal(self, other: XMLNode) -> bool:
        """Same name and the same attribute values in the same order."""
        if not isinstance(other, XMLElement) or other.name != self.name:
            return False
        if len(other._attributes) != len(self._attributes):
            return False
        return all(a.value == b.value for a, b in zip(self._attributes, other._attributes))

    def accept(self, visitor: XMLVisitor) -> bool:
        if visitor.visit_enter_element(self, self.attributes()):
            for child in list(self._children):
                if not child.accept(visitor):
                    break
        return visitor.visit_exit_element(self)