"""Translation layer for codepoint-by-codepoint text rewriting.

Key Components:
    TextTranslator: Base class owning the translation driver loop
    CodePointTranslator: Base for steps that look at one codepoint
    AggregateTranslator: Ordered composition of translators
    LookupTranslator: Table-driven sequence replacement
    NumericEntityEscaper / NumericEntityUnescaper: Character references
    UnicodeUnpairedSurrogateRemover: Drops lone surrogates
"""

from .aggregate import AggregateTranslator, compose
from .lookup import LookupTranslator
from .numeric import (
    NumericEntityEscaper,
    NumericEntityUnescaper,
    UnicodeUnpairedSurrogateRemover,
)
from .presets import (
    ESCAPE_XML10,
    ESCAPE_XML11,
    UNESCAPE_XML,
    build_translator,
    escape_xml10,
    escape_xml11,
    unescape_xml,
)
from .translator import (
    CodePointTranslator,
    TextSink,
    TextTranslator,
    TranslationInvariantError,
    codepoint_at,
    codepoint_width,
    count_codepoints,
    hex_of,
)

__all__ = [
    # Modules
    "aggregate",
    "entities",
    "lookup",
    "numeric",
    "presets",
    "translator",
    # Core contract
    "TextTranslator",
    "CodePointTranslator",
    "TextSink",
    "TranslationInvariantError",
    "AggregateTranslator",
    "compose",
    "codepoint_at",
    "codepoint_width",
    "count_codepoints",
    "hex_of",
    # Steps
    "LookupTranslator",
    "NumericEntityEscaper",
    "NumericEntityUnescaper",
    "UnicodeUnpairedSurrogateRemover",
    # Presets
    "ESCAPE_XML10",
    "ESCAPE_XML11",
    "UNESCAPE_XML",
    "build_translator",
    "escape_xml10",
    "escape_xml11",
    "unescape_xml",
]
