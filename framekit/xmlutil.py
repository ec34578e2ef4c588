"""Shared XML helpers: error codes, character classes, entity and text
processing, and conversions between strings and values."""

from __future__ import annotations

import math
import re
import string
import struct
from enum import Enum, IntEnum, IntFlag

__all__ = [
    "ENTITIES",
    "UTF8_BOM",
    "XMLError",
    "XMLException",
    "Whitespace",
    "TextFlags",
    "read_bom",
    "convert_utf32_to_utf8",
    "get_character_ref",
    "process_text",
    "collapse_whitespace",
    "is_whitespace",
    "is_name_start_char",
    "is_name_char",
    "set_bool_serialization",
    "to_str",
    "to_int",
    "to_unsigned",
    "to_int64",
    "to_bool",
    "to_float",
    "to_double",
    "error_id_to_name",
]

UTF8_BOM = b"\xef\xbb\xbf"

# Named entities understood on input and produced on output, in lookup order.
ENTITIES: tuple[tuple[str, str], ...] = (
    ("quot", '"'),
    ("amp", "&"),
    ("apos", "'"),
    ("lt", "<"),
    ("gt", ">"),
)

_WHITESPACE = " \t\n\v\f\r"
_ERROR_BUFFER_SIZE = 1000


class XMLError(IntEnum):
    """Result codes for XML operations."""

    SUCCESS = 0
    NO_ATTRIBUTE = 1
    WRONG_ATTRIBUTE_TYPE = 2
    ERROR_FILE_NOT_FOUND = 3
    ERROR_FILE_COULD_NOT_BE_OPENED = 4
    ERROR_FILE_READ_ERROR = 5
    UNUSED_ERROR_ELEMENT_MISMATCH = 6
    ERROR_PARSING_ELEMENT = 7
    ERROR_PARSING_ATTRIBUTE = 8
    UNUSED_ERROR_IDENTIFYING_TAG = 9
    ERROR_PARSING_TEXT = 10
    ERROR_PARSING_CDATA = 11
    ERROR_PARSING_COMMENT = 12
    ERROR_PARSING_DECLARATION = 13
    ERROR_PARSING_UNKNOWN = 14
    ERROR_EMPTY_DOCUMENT = 15
    ERROR_MISMATCHED_ELEMENT = 16
    ERROR_PARSING = 17
    CAN_NOT_CONVERT_TEXT = 18
    NO_TEXT_NODE = 19


_ERROR_NAMES = (
    "XML_SUCCESS",
    "XML_NO_ATTRIBUTE",
    "XML_WRONG_ATTRIBUTE_TYPE",
    "XML_ERROR_FILE_NOT_FOUND",
    "XML_ERROR_FILE_COULD_NOT_BE_OPENED",
    "XML_ERROR_FILE_READ_ERROR",
    "UNUSED_XML_ERROR_ELEMENT_MISMATCH",
    "XML_ERROR_PARSING_ELEMENT",
    "XML_ERROR_PARSING_ATTRIBUTE",
    "UNUSED_XML_ERROR_IDENTIFYING_TAG",
    "XML_ERROR_PARSING_TEXT",
    "XML_ERROR_PARSING_CDATA",
    "XML_ERROR_PARSING_COMMENT",
    "XML_ERROR_PARSING_DECLARATION",
    "XML_ERROR_PARSING_UNKNOWN",
    "XML_ERROR_EMPTY_DOCUMENT",
    "XML_ERROR_MISMATCHED_ELEMENT",
    "XML_ERROR_PARSING",
    "XML_CAN_NOT_CONVERT_TEXT",
    "XML_NO_TEXT_NODE",
)


def error_id_to_name(error: XMLError | int) -> str:
    """Return the conventional name of an error code."""
    return _ERROR_NAMES[XMLError(error)]


class XMLException(Exception):
    """Raised when an XML operation fails; carries the code and line."""

    def __init__(
        self,
        error: XMLError | int,
        line_number: int = 0,
        detail: str | None = None,
    ) -> None:
        self.error = XMLError(error)
        self.line_number = line_number
        self.detail = detail
        super().__init__(self.error_str or error_id_to_name(self.error))

    @property
    def name(self) -> str:
        """Name of the error code."""
        return error_id_to_name(self.error)

    @property
    def error_str(self) -> str:
        """Full error description, or an empty string when no detail was given."""
        if self.detail is None:
            return ""
        code = int(self.error)
        text = (
            f"Error={self.name} ErrorID={code} (0x{code:x}) "
            f"Line number={self.line_number}: {self.detail}"
        )
        return text[: _ERROR_BUFFER_SIZE - 1]


class Whitespace(Enum):
    """How runs of whitespace in text are treated while parsing."""

    PRESERVE = 0
    COLLAPSE = 1


class TextFlags(IntFlag):
    """Processing applied to raw text taken from a document."""

    NONE = 0
    NEEDS_ENTITY_PROCESSING = 0x01
    NEEDS_NEWLINE_NORMALIZATION = 0x02
    NEEDS_WHITESPACE_COLLAPSING = 0x04

    TEXT_ELEMENT = NEEDS_ENTITY_PROCESSING | NEEDS_NEWLINE_NORMALIZATION
    TEXT_ELEMENT_LEAVE_ENTITIES = NEEDS_NEWLINE_NORMALIZATION
    ATTRIBUTE_VALUE = NEEDS_ENTITY_PROCESSING | NEEDS_NEWLINE_NORMALIZATION
    ATTRIBUTE_VALUE_LEAVE_ENTITIES = NEEDS_NEWLINE_NORMALIZATION
    COMMENT = NEEDS_NEWLINE_NORMALIZATION


def is_whitespace(ch: str) -> bool:
    """Return True for a single ASCII whitespace character."""
    return len(ch) == 1 and ch in _WHITESPACE


def is_name_start_char(ch: str) -> bool:
    """Return True when ``ch`` may begin an element or attribute name."""
    if len(ch) != 1:
        return False
    if ord(ch) >= 128:
        return True
    return ch in string.ascii_letters or ch in ":_"


def is_name_char(ch: str) -> bool:
    """Return True when ``ch`` may appear inside a name."""
    return is_name_start_char(ch) or (len(ch) == 1 and (ch in string.digits or ch in ".-"))


def read_bom(text: str | bytes) -> tuple[str | bytes, bool]:
    """Strip a leading UTF-8 byte order mark; report whether one was there."""
    if isinstance(text, (bytes, bytearray)):
        if text.startswith(UTF8_BOM):
            return bytes(text[len(UTF8_BOM):]), True
        return bytes(text), False
    if text.startswith("\ufeff"):
        return text[1:], True
    return text, False


_FIRST_BYTE_MARK = (0x00, 0x00, 0xC0, 0xE0, 0xF0, 0xF8, 0xFC)


def convert_utf32_to_utf8(value: int) -> bytes:
    """Encode a code point as UTF-8 bytes.

    Values of 0x200000 and above cannot be encoded and give empty bytes.
    """
    if value < 0:
        raise ValueError("code point must not be negative")
    if value < 0x80:
        length = 1
    elif value < 0x800:
        length = 2
    elif value < 0x10000:
        length = 3
    elif value < 0x200000:
        length = 4
    else:
        return b""
    tail: list[int] = []
    for _ in range(length - 1):
        tail.append((value & 0x3F) | 0x80)
        value >>= 6
    return bytes([value | _FIRST_BYTE_MARK[length], *reversed(tail)])


def _utf8_to_text(data: bytes) -> str:
    try:
        return data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError:
        return data.decode("utf-8", "replace")


def get_character_ref(text: str, pos: int) -> tuple[str, int] | None:
    """Decode a numeric character reference starting with ``&`` at ``pos``.

    Returns the decoded text and the position just past the reference, or
    None when the reference is malformed.
    """
    if not text.startswith("#", pos + 1) or pos + 2 >= len(text):
        return "", pos + 1

    if text[pos + 2] == "x":
        start = pos + 3
        if start >= len(text):
            return None
        semi = text.find(";", start)
        if semi < 0:
            return None
        digits = text[start:semi]
        digits = digits[digits.rfind("x") + 1:]
        if any(d not in string.hexdigits for d in digits):
            return None
        ucs = int(digits, 16) if digits else 0
    else:
        start = pos + 2
        semi = text.find(";", start)
        if semi < 0:
            return None
        digits = text[start:semi]
        digits = digits[digits.rfind("#") + 1:]
        if any(d not in string.digits for d in digits):
            return None
        ucs = int(digits) if digits else 0

    return _utf8_to_text(convert_utf32_to_utf8(ucs)), semi + 1


def collapse_whitespace(text: str) -> str:
    """Trim leading and trailing whitespace and squeeze inner runs to one space."""
    out: list[str] = []
    pending_space = False
    for ch in text:
        if is_whitespace(ch):
            pending_space = bool(out)
            continue
        if pending_space:
            out.append(" ")
            pending_space = False
        out.append(ch)
    return "".join(out)


def _match_entity(raw: str, pos: int) -> tuple[str, int] | None:
    for pattern, value in ENTITIES:
        end = pos + 1 + len(pattern)
        if raw.startswith(pattern, pos + 1) and raw.startswith(";", end):
            return value, end + 1
    return None


def process_text(raw: str, flags: TextFlags | int) -> str:
    """Apply newline normalization, entity decoding and whitespace collapsing."""
    flags = TextFlags(flags)
    normalize = bool(flags & TextFlags.NEEDS_NEWLINE_NORMALIZATION)
    entities = bool(flags & TextFlags.NEEDS_ENTITY_PROCESSING)

    out: list[str] = []
    pos = 0
    size = len(raw)
    while pos < size:
        ch = raw[pos]
        if normalize and ch == "\r":
            pos += 2 if raw.startswith("\n", pos + 1) else 1
            out.append("\n")
        elif normalize and ch == "\n":
            pos += 2 if raw.startswith("\r", pos + 1) else 1
            out.append("\n")
        elif entities and ch == "&":
            if raw.startswith("#", pos + 1):
                ref = get_character_ref(raw, pos)
            else:
                ref = _match_entity(raw, pos)
            if ref is None:
                # Malformed or unknown entities are kept as written.
                out.append("&")
                pos += 1
            else:
                value, pos = ref
                out.append(value)
        else:
            out.append(ch)
            pos += 1

    text = "".join(out)
    if flags & TextFlags.NEEDS_WHITESPACE_COLLAPSING:
        text = collapse_whitespace(text)
    return text


_bool_text = {True: "true", False: "false"}


def set_bool_serialization(write_true: str | None, write_false: str | None) -> None:
    """Choose the words written for booleans; None restores the default."""
    _bool_text[True] = write_true if write_true is not None else "true"
    _bool_text[False] = write_false if write_false is not None else "false"


def to_str(value: bool | int | float) -> str:
    """Render a boolean, integer or float as document text."""
    if isinstance(value, bool):
        return _bool_text[value]
    if isinstance(value, int):
        return "%d" % value
    if isinstance(value, float):
        return "%.17g" % value
    raise TypeError(f"cannot convert {type(value).__name__} to XML text")


_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:"
    r"0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[iI][nN][fF](?:[iI][nN][iI][tT][yY])?"
    r"|[nN][aA][nN](?:\([0-9A-Za-z_]*\))?"
    r")"
)


def _scan_int(text: str) -> int:
    match = _INT_RE.match(text.lstrip(_WHITESPACE))
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group())


def _wrap(value: int, bits: int, signed: bool) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def to_int(text: str) -> int:
    """Read a signed 32-bit integer from the start of ``text``."""
    return _wrap(_scan_int(text), 32, True)


def to_unsigned(text: str) -> int:
    """Read an unsigned 32-bit integer; a minus sign wraps around."""
    return _wrap(_scan_int(text), 32, False)


def to_int64(text: str) -> int:
    """Read a signed 64-bit integer from the start of ``text``."""
    return _wrap(_scan_int(text), 64, True)


def to_bool(text: str) -> bool:
    """Read a boolean: any integer (non-zero is True), or "true" / "false"."""
    try:
        return to_int(text) != 0
    except ValueError:
        pass
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"not a boolean: {text!r}")


def to_double(text: str) -> float:
    """Read a floating point number from the start of ``text``."""
    match = _FLOAT_RE.match(text.lstrip(_WHITESPACE))
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    token = match.group()
    body = token.lstrip("+-")
    negative = token.startswith("-")
    if body[:2] in ("0x", "0X"):
        return float.fromhex(token)
    if body[:3].lower() == "nan":
        return math.copysign(math.nan, -1.0 if negative else 1.0)
    return float(token)


def to_float(text: str) -> float:
    """Read a number and round it to single precision."""
    value = to_double(text)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)