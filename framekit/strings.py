"""String helpers: splitting, matching, replacing and printf-style formatting."""

from __future__ import annotations

__all__ = [
    "split_string",
    "starts_with",
    "contains",
    "replace_all",
    "format_string",
]


def split_string(origin: str, tok: str) -> list[str]:
    """Split ``origin`` at any character found in ``tok``.

    Empty pieces (from adjacent, leading or trailing delimiters) are dropped.
    """
    delimiters = set(tok)
    pieces: list[str] = []
    current: list[str] = []
    for ch in origin:
        if ch in delimiters:
            if current:
                pieces.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        pieces.append("".join(current))
    return pieces


def starts_with(text: str, comp: str) -> bool:
    """Return True when ``text`` begins with ``comp``."""
    return text.startswith(comp)


def contains(text: str, comp: str) -> bool:
    """Return True when ``comp`` occurs anywhere in ``text``."""
    return comp in text


def replace_all(text: str, comp: str, rep: str) -> str:
    """Replace every non-overlapping occurrence of ``comp`` with ``rep``.

    Scanning continues after each inserted replacement, so ``rep`` may
    contain ``comp`` without causing repeated substitution.
    """
    if not comp:
        raise ValueError("the text to replace must not be empty")
    return text.replace(comp, rep)


def format_string(fmt: str, *args: object) -> str:
    """Format ``args`` into ``fmt`` using printf-style conversions."""
    return fmt % args