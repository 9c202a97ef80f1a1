"""Table-driven translation of fixed character sequences."""

from typing import Dict, Iterable, Tuple

from .translator import TextSink, TextTranslator, count_codepoints


class LookupTranslator(TextTranslator):
    """Translator that replaces fixed sequences using a lookup table.

    At each position the longest candidate is tried first, so a table holding
    both ``"&"`` and ``"&amp;"`` matches the longer entry when it is present.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]]) -> None:
        """Initialize translator from ``(sequence, replacement)`` pairs.

        Args:
            pairs: Sequences to find and the text that replaces them

        Raises:
            ValueError: If a sequence is empty
        """
        # sequence -> (replacement, codepoints in sequence)
        table: Dict[str, Tuple[str, int]] = {}
        shortest = 0
        longest = 0
        for sequence, replacement in pairs:
            if not sequence:
                raise ValueError("Lookup sequences must not be empty")
            table[sequence] = (replacement, count_codepoints(sequence))
            size = len(sequence)
            if shortest == 0 or size < shortest:
                shortest = size
            if size > longest:
                longest = size
        self._table = table
        self._shortest = shortest
        self._longest = longest

    def translate_at(self, text: str, index: int, out: TextSink) -> int:
        if not self._table:
            return 0
        max_size = min(self._longest, len(text) - index)
        for size in range(max_size, self._shortest - 1, -1):
            entry = self._table.get(text[index:index + size])
            if entry is not None:
                replacement, consumed = entry
                out.write(replacement)
                return consumed
        return 0

    def __len__(self) -> int:
        return len(self._table)
