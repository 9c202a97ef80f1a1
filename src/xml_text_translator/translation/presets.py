"""Ready-made XML escaping and unescaping translators.

Progressive API disclosure:
- Level 1: ``escape_xml10``, ``escape_xml11``, ``unescape_xml``
- Level 2: the ``ESCAPE_XML10``, ``ESCAPE_XML11`` and ``UNESCAPE_XML``
  translators, which can be extended with ``compose``
- Level 3: ``build_translator`` driven by a ``TranslationConfig``
"""

from typing import List, Optional, Tuple

from ..shared.config import TranslationConfig, TranslationMode
from .aggregate import AggregateTranslator
from .entities import APOS_ESCAPE, APOS_UNESCAPE, BASIC_ESCAPE, BASIC_UNESCAPE
from .lookup import LookupTranslator
from .numeric import (
    NumericEntityEscaper,
    NumericEntityUnescaper,
    UnicodeUnpairedSurrogateRemover,
)
from .translator import TextTranslator

# XML 1.0 allows tab, LF and CR as the only C0 controls
XML10_ALLOWED_CONTROLS = {0x09, 0x0A, 0x0D}

# U+FFFE and U+FFFF are non-characters in both XML versions
_NONCHARACTER_REMOVALS: List[Tuple[str, str]] = [("\uFFFE", ""), ("\uFFFF", "")]


def _xml10_removals() -> List[Tuple[str, str]]:
    removals = [
        (chr(code), "") for code in range(0x00, 0x20)
        if code not in XML10_ALLOWED_CONTROLS
    ]
    return removals + _NONCHARACTER_REMOVALS


def _xml11_removals() -> List[Tuple[str, str]]:
    return [("\u0000", ""), ("\u000B", "&#11;"), ("\u000C", "&#12;")] + (
        _NONCHARACTER_REMOVALS
    )


def _xml10_escaper(remove_unpaired_surrogates: bool = True) -> AggregateTranslator:
    return AggregateTranslator(
        LookupTranslator(BASIC_ESCAPE),
        LookupTranslator(APOS_ESCAPE),
        LookupTranslator(_xml10_removals()),
        NumericEntityEscaper.between(0x7F, 0x84),
        NumericEntityEscaper.between(0x86, 0x9F),
        UnicodeUnpairedSurrogateRemover() if remove_unpaired_surrogates else None,
    )


def _xml11_escaper(remove_unpaired_surrogates: bool = True) -> AggregateTranslator:
    return AggregateTranslator(
        LookupTranslator(BASIC_ESCAPE),
        LookupTranslator(APOS_ESCAPE),
        LookupTranslator(_xml11_removals()),
        NumericEntityEscaper.between(0x01, 0x08),
        NumericEntityEscaper.between(0x0E, 0x1F),
        NumericEntityEscaper.between(0x7F, 0x84),
        NumericEntityEscaper.between(0x86, 0x9F),
        UnicodeUnpairedSurrogateRemover() if remove_unpaired_surrogates else None,
    )


def _xml_unescaper(unescaper: NumericEntityUnescaper) -> AggregateTranslator:
    return AggregateTranslator(
        LookupTranslator(BASIC_UNESCAPE),
        LookupTranslator(APOS_UNESCAPE),
        unescaper,
    )


ESCAPE_XML10: TextTranslator = _xml10_escaper()
ESCAPE_XML11: TextTranslator = _xml11_escaper()
UNESCAPE_XML: TextTranslator = _xml_unescaper(NumericEntityUnescaper())


def build_translator(config: Optional[TranslationConfig] = None) -> TextTranslator:
    """Build the translator selected by a configuration.

    Args:
        config: Translation configuration (uses default if None)

    Returns:
        Translator for ``config.mode``
    """
    config = config or TranslationConfig()
    if config.mode is TranslationMode.ESCAPE_XML10:
        return _xml10_escaper(config.remove_unpaired_surrogates)
    if config.mode is TranslationMode.ESCAPE_XML11:
        return _xml11_escaper(config.remove_unpaired_surrogates)
    return _xml_unescaper(NumericEntityUnescaper(config.semicolon))


def escape_xml10(text: Optional[str]) -> Optional[str]:
    """Escape text for an XML 1.0 document.

    Markup characters become entities, characters XML 1.0 cannot represent are
    dropped and C1 controls become numeric references.
    """
    return ESCAPE_XML10.translate(text)


def escape_xml11(text: Optional[str]) -> Optional[str]:
    """Escape text for an XML 1.1 document."""
    return ESCAPE_XML11.translate(text)


def unescape_xml(text: Optional[str]) -> Optional[str]:
    """Resolve the five XML entities and numeric character references."""
    return UNESCAPE_XML.translate(text)
