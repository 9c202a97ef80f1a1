"""Ordered composition of translators."""

from typing import Optional, Tuple

from .translator import TextSink, TextTranslator


class AggregateTranslator(TextTranslator):
    """Translator that tries a fixed sequence of translators in order.

    At each position the first translator reporting non-zero consumption
    wins; its count is returned. If every translator declines, so does the
    aggregate. ``None`` entries are skipped.
    """

    def __init__(self, *translators: Optional[TextTranslator]) -> None:
        self._translators: Tuple[TextTranslator, ...] = tuple(
            t for t in translators if t is not None
        )

    @property
    def translators(self) -> Tuple[TextTranslator, ...]:
        """Translators in the order they are tried."""
        return self._translators

    def translate_at(self, text: str, index: int, out: TextSink) -> int:
        for translator in self._translators:
            consumed = translator.translate_at(text, index, out)
            if consumed != 0:
                return consumed
        return 0

    def __repr__(self) -> str:
        names = ", ".join(type(t).__name__ for t in self._translators)
        return f"AggregateTranslator({names})"


def compose(
    translator: TextTranslator, *others: Optional[TextTranslator]
) -> AggregateTranslator:
    """Combine translators, ``translator`` tried first and ``others`` after.

    Args:
        translator: Translator tried first at every position
        *others: Translators tried next, in the given order

    Returns:
        AggregateTranslator preserving the given order
    """
    return AggregateTranslator(translator, *others)
