"""Codepoint translation driver and the transformation step contract.

A translator rewrites text one position at a time. Subclasses implement
``translate_at``, which looks at the input at a given index, optionally writes
replacement text to a sink and reports how many codepoints it consumed. The
driver in ``translate_to`` owns the iteration: it copies through any codepoint
that no step consumed and advances past the ones that were.

Python strings normally hold whole codepoints, but text decoded with
``errors="surrogatepass"`` can carry UTF-16 surrogate pairs as two adjacent
characters. The driver treats such a pair as a single codepoint of width two,
so a step never sees an index that points into the middle of a pair.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Protocol

if TYPE_CHECKING:
    from .aggregate import AggregateTranslator

logger = logging.getLogger(__name__)

HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF
SUPPLEMENTARY_PLANE_START = 0x10000


class TextSink(Protocol):
    """Append-only destination for translated text.

    Files opened in text mode, ``sys.stdout`` and ``io.StringIO`` all qualify.
    A sink may raise on any write; the driver lets that propagate unchanged.
    """

    def write(self, text: str) -> Any:
        ...


class TranslationInvariantError(RuntimeError):
    """Raised when translation breaks an internal guarantee.

    This is never raised for malformed input. It signals a defect: a step
    reporting negative consumption, or the in-memory sink failing.
    """


def is_surrogate(codepoint: int) -> bool:
    """Check if a codepoint lies in the UTF-16 surrogate range."""
    return HIGH_SURROGATE_START <= codepoint <= LOW_SURROGATE_END


def codepoint_at(text: str, index: int) -> int:
    """Return the codepoint starting at ``index``.

    A high surrogate followed by a low surrogate is combined into the
    supplementary codepoint they encode. A lone surrogate is returned as is.
    """
    high = ord(text[index])
    if HIGH_SURROGATE_START <= high <= HIGH_SURROGATE_END and index + 1 < len(text):
        low = ord(text[index + 1])
        if LOW_SURROGATE_START <= low <= LOW_SURROGATE_END:
            return (
                SUPPLEMENTARY_PLANE_START
                + ((high - HIGH_SURROGATE_START) << 10)
                + (low - LOW_SURROGATE_START)
            )
    return high


def codepoint_width(text: str, index: int) -> int:
    """Return how many string positions the codepoint at ``index`` occupies."""
    high = ord(text[index])
    if HIGH_SURROGATE_START <= high <= HIGH_SURROGATE_END and index + 1 < len(text):
        low = ord(text[index + 1])
        if LOW_SURROGATE_START <= low <= LOW_SURROGATE_END:
            return 2
    return 1


def count_codepoints(text: str) -> int:
    """Count codepoints in ``text``, a surrogate pair counting once."""
    count = 0
    pos = 0
    while pos < len(text):
        pos += codepoint_width(text, pos)
        count += 1
    return count


def hex_of(codepoint: int) -> str:
    """Return the uppercase hexadecimal digits of a codepoint.

    No prefix and no zero padding: ``hex_of(65) == "41"``.

    Raises:
        ValueError: If the codepoint is negative
    """
    if codepoint < 0:
        raise ValueError(f"Codepoint must be >= 0, got {codepoint}")
    return f"{codepoint:X}"


class TextTranslator(ABC):
    """Base class for all text translators.

    Escaping and unescaping are both contextual, so one interface serves both
    directions. Translators hold only immutable configuration and may be
    shared between threads translating independent inputs.
    """

    @abstractmethod
    def translate_at(self, text: str, index: int, out: TextSink) -> int:
        """Translate the codepoints of ``text`` starting at ``index``.

        Implementations may write any amount of text to ``out``. They must not
        raise for malformed or unmatched input; returning 0 leaves the
        codepoint to the driver, which copies it through unchanged.

        Args:
            text: Full input being translated
            index: Current position, always on a codepoint boundary
            out: Sink receiving the translated text

        Returns:
            Number of codepoints consumed (a surrogate pair counts once)
        """

    def translate(self, text: Optional[str]) -> Optional[str]:
        """Translate text into a new string.

        Args:
            text: Text to translate, or None

        Returns:
            Translated text, or None when ``text`` is None

        Raises:
            TranslationInvariantError: If the in-memory sink fails
        """
        if text is None:
            return None
        buffer = io.StringIO()
        try:
            self.translate_to(text, buffer)
        except OSError as e:
            logger.error(
                "In-memory translation sink failed",
                extra={
                    "component": "text_translator",
                    "translator": type(self).__name__,
                },
                exc_info=True,
            )
            raise TranslationInvariantError(
                "Writing to an in-memory buffer failed"
            ) from e
        return buffer.getvalue()

    def translate_to(self, text: Optional[str], out: TextSink) -> None:
        """Translate text onto a sink.

        Args:
            text: Text to translate; None writes nothing
            out: Sink receiving the translated text

        Raises:
            ValueError: If ``out`` is None
            TranslationInvariantError: If a step reports negative consumption
        """
        if out is None:
            raise ValueError("The sink must not be None")
        if text is None:
            return

        length = len(text)
        logger.debug(
            "Translating text",
            extra={
                "component": "text_translator",
                "translator": type(self).__name__,
                "length": length,
            },
        )

        pos = 0
        while pos < length:
            consumed = self.translate_at(text, pos, out)
            if consumed == 0:
                width = codepoint_width(text, pos)
                out.write(text[pos:pos + width])
                pos += width
                continue
            if consumed < 0:
                logger.error(
                    "Translation step reported negative consumption",
                    extra={
                        "component": "text_translator",
                        "translator": type(self).__name__,
                        "position": pos,
                        "consumed": consumed,
                    },
                )
                raise TranslationInvariantError(
                    f"{type(self).__name__} consumed {consumed} codepoints at {pos}"
                )
            # a consumed codepoint may be a two-position surrogate pair
            for _ in range(consumed):
                if pos >= length:
                    break
                pos += codepoint_width(text, pos)

    def compose(self, *translators: Optional["TextTranslator"]) -> "AggregateTranslator":
        """Merge this translator with others, this one tried first.

        Args:
            *translators: Translators tried in order after this one

        Returns:
            AggregateTranslator over this translator and ``translators``
        """
        from .aggregate import AggregateTranslator

        return AggregateTranslator(self, *translators)

    @staticmethod
    def hex(codepoint: int) -> str:
        """Return the uppercase hexadecimal digits of a codepoint."""
        return hex_of(codepoint)


class CodePointTranslator(TextTranslator):
    """Translator that looks at exactly one codepoint at a time."""

    def translate_at(self, text: str, index: int, out: TextSink) -> int:
        """Delegate the codepoint at ``index`` to ``translate_codepoint``."""
        codepoint = codepoint_at(text, index)
        return 1 if self.translate_codepoint(codepoint, out) else 0

    @abstractmethod
    def translate_codepoint(self, codepoint: int, out: TextSink) -> bool:
        """Translate a single codepoint.

        Returns:
            True if the codepoint was consumed
        """
