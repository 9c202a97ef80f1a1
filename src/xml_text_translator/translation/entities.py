"""Entity tables for XML escaping and unescaping."""

from typing import Iterable, Tuple

EntityTable = Tuple[Tuple[str, str], ...]

# Characters that must always be escaped in XML markup
BASIC_ESCAPE: EntityTable = (
    ('"', "&quot;"),
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)

# Apostrophe is escaped separately since HTML 4 has no &apos;
APOS_ESCAPE: EntityTable = (
    ("'", "&apos;"),
)


def invert(table: Iterable[Tuple[str, str]]) -> EntityTable:
    """Swap the columns of an entity table to turn an escape into an unescape."""
    return tuple((replacement, sequence) for sequence, replacement in table)


BASIC_UNESCAPE: EntityTable = invert(BASIC_ESCAPE)
APOS_UNESCAPE: EntityTable = invert(APOS_ESCAPE)
