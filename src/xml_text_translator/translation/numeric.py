"""Numeric character reference escaping and unescaping.

Covers ``&#NNN;`` decimal and ``&#xHHH;`` hexadecimal references as well as
the removal of surrogates that are not part of a pair.
"""

from ..shared.config import UnescapeOption
from .translator import CodePointTranslator, TextSink, TextTranslator, is_surrogate

MAX_CODEPOINT = 0x10FFFF

# Characters scanned as the body of a reference; radix is checked on parse
_REFERENCE_DIGITS = frozenset("0123456789abcdefABCDEF")


class NumericEntityEscaper(CodePointTranslator):
    """Translates codepoints in (or outside) a range into decimal references."""

    def __init__(
        self, below: int = 0, above: int = MAX_CODEPOINT, between: bool = True
    ) -> None:
        """Initialize escaper for an inclusive codepoint range.

        Args:
            below: Lowest codepoint of the range
            above: Highest codepoint of the range
            between: Escape codepoints inside the range if True, outside if False
        """
        if below > above:
            raise ValueError(f"Range start {below} is greater than range end {above}")
        self._below = below
        self._above = above
        self._between = between

    @classmethod
    def below(cls, codepoint: int) -> "NumericEntityEscaper":
        """Escape every codepoint lower than ``codepoint``."""
        return cls.outside_of(codepoint, MAX_CODEPOINT)

    @classmethod
    def above(cls, codepoint: int) -> "NumericEntityEscaper":
        """Escape every codepoint higher than ``codepoint``."""
        return cls.outside_of(0, codepoint)

    @classmethod
    def between(cls, codepoint_low: int, codepoint_high: int) -> "NumericEntityEscaper":
        """Escape codepoints from ``codepoint_low`` to ``codepoint_high`` inclusive."""
        return cls(codepoint_low, codepoint_high, True)

    @classmethod
    def outside_of(
        cls, codepoint_low: int, codepoint_high: int
    ) -> "NumericEntityEscaper":
        """Escape codepoints outside ``codepoint_low`` to ``codepoint_high``."""
        return cls(codepoint_low, codepoint_high, False)

    def translate_codepoint(self, codepoint: int, out: TextSink) -> bool:
        if self._between != (self._below <= codepoint <= self._above):
            return False
        out.write(f"&#{codepoint};")
        return True


class NumericEntityUnescaper(TextTranslator):
    """Translates decimal and hexadecimal character references to codepoints.

    A reference that cannot be decoded, such as ``&#xZZ;`` or one naming a
    value above U+10FFFF, is left in the output unchanged.
    """

    def __init__(
        self, semicolon: UnescapeOption = UnescapeOption.SEMICOLON_REQUIRED
    ) -> None:
        self._semicolon = semicolon

    @property
    def semicolon(self) -> UnescapeOption:
        """Semicolon handling in effect."""
        return self._semicolon

    def translate_at(self, text: str, index: int, out: TextSink) -> int:
        length = len(text)
        if text[index] != "&" or index >= length - 2 or text[index + 1] != "#":
            return 0

        start = index + 2
        is_hex = False
        if text[start] in ("x", "X"):
            start += 1
            is_hex = True
            if start == length:
                return 0

        end = start
        while end < length and text[end] in _REFERENCE_DIGITS:
            end += 1

        try:
            value = int(text[start:end], 16 if is_hex else 10)
        except ValueError:
            return 0
        if value > MAX_CODEPOINT:
            return 0

        semicolon_next = end != length and text[end] == ";"
        if not semicolon_next and self._semicolon is UnescapeOption.SEMICOLON_REQUIRED:
            return 0

        out.write(chr(value))
        return 2 + (end - start) + (1 if is_hex else 0) + (1 if semicolon_next else 0)


class UnicodeUnpairedSurrogateRemover(CodePointTranslator):
    """Drops surrogates that are not part of a high/low pair."""

    def translate_codepoint(self, codepoint: int, out: TextSink) -> bool:
        # paired surrogates arrive here already combined
        return is_surrogate(codepoint)
