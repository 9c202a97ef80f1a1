"""XML Text Translator.

A codepoint-by-codepoint text translation primitive with ready-made XML
escaping and unescaping built on top of it.

Progressive API Disclosure:
- Level 1: Simple functions - escape_xml10(), escape_xml11(), unescape_xml()
- Level 2: Preset translators - ESCAPE_XML10, ESCAPE_XML11, UNESCAPE_XML
- Level 3: Custom translators - subclass TextTranslator and compose()
"""

__version__ = "0.1.0"
__author__ = "XML Text Translator Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Preset translators
from .translation.presets import (
    ESCAPE_XML10,
    ESCAPE_XML11,
    UNESCAPE_XML,
    build_translator,
    escape_xml10,
    escape_xml11,
    unescape_xml,
)

# Configuration classes for advanced usage
from .shared.config import TranslationConfig, TranslationMode, UnescapeOption

# Level 3: Building blocks for custom translators
from .translation.aggregate import AggregateTranslator, compose
from .translation.translator import (
    CodePointTranslator,
    TextTranslator,
    TranslationInvariantError,
    hex_of,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple translation functions
    "escape_xml10",
    "escape_xml11",
    "unescape_xml",

    # Level 2: Preset translators
    "ESCAPE_XML10",
    "ESCAPE_XML11",
    "UNESCAPE_XML",
    "build_translator",

    # Level 3: Building blocks
    "TextTranslator",
    "CodePointTranslator",
    "AggregateTranslator",
    "compose",
    "hex_of",
    "TranslationInvariantError",

    # Configuration classes for advanced usage
    "TranslationConfig",
    "TranslationMode",
    "UnescapeOption",
]
