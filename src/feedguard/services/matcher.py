"""Multi-pattern whole-word matcher built on an Aho-Corasick automaton.

The automaton is built once per term set and scans text in a single pass, so
the cost of a scan is linear in the length of the text regardless of how many
terms are loaded or how they share prefixes. Matches are filtered with the
same word-boundary rule as the regular-expression ``\\b`` assertion and are
case-insensitive.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

__all__ = ["TermMatcher", "fold_char", "is_word_char"]

_ROOT = 0
_NONE = -1


def fold_char(ch: str) -> str:
    """Lower-case a single character without changing string length."""
    low = ch.lower()
    return low if len(low) == 1 else ch


def is_word_char(ch: str) -> bool:
    """Return True for characters the ``\\w`` class would match."""
    return ch == "_" or ch.isalnum()


def _at_boundary(text: str, index: int) -> bool:
    left = index > 0 and is_word_char(text[index - 1])
    right = index < len(text) and is_word_char(text[index])
    return left != right


class TermMatcher:
    """Aho-Corasick automaton over a fixed collection of terms.

    Nodes are stored in parallel lists indexed by node id; node 0 is the root.
    """

    def __init__(self, terms: Iterable[str]) -> None:
        self._goto: list[dict[str, int]] = [{}]
        self._fail: list[int] = [_ROOT]
        self._depth: list[int] = [0]
        self._terminal: list[bool] = [False]
        # Nearest proper suffix state that ends a term.
        self._output: list[int] = [_NONE]
        self.term_count = 0

        for term in terms:
            self._insert(term)
        self._link()

    def _insert(self, term: str) -> None:
        if not term:
            raise ValueError("blocked terms must not be empty")
        node = _ROOT
        for ch in term:
            key = fold_char(ch)
            nxt = self._goto[node].get(key)
            if nxt is None:
                nxt = len(self._goto)
                self._goto.append({})
                self._fail.append(_ROOT)
                self._depth.append(self._depth[node] + 1)
                self._terminal.append(False)
                self._output.append(_NONE)
                self._goto[node][key] = nxt
            node = nxt
        if not self._terminal[node]:
            self._terminal[node] = True
            self.term_count += 1

    def _link(self) -> None:
        queue: deque[int] = deque(self._goto[_ROOT].values())
        while queue:
            node = queue.popleft()
            for key, child in self._goto[node].items():
                fallback = self._fail[node]
                while fallback != _ROOT and key not in self._goto[fallback]:
                    fallback = self._fail[fallback]
                target = self._goto[fallback].get(key, _ROOT)
                self._fail[child] = target if target != child else _ROOT
                suffix = self._fail[child]
                self._output[child] = suffix if self._terminal[suffix] else self._output[suffix]
                queue.append(child)

    def _step(self, state: int, key: str) -> int:
        while state != _ROOT and key not in self._goto[state]:
            state = self._fail[state]
        return self._goto[state].get(key, _ROOT)

    def find_spans(self, text: str) -> list[tuple[int, int]]:
        """Return non-overlapping ``(start, end)`` spans of whole-word matches.

        Overlaps are resolved leftmost-longest: the earliest starting match wins
        and, among matches starting at the same index, the longest one.
        """
        longest: dict[int, int] = {}
        state = _ROOT
        for index, ch in enumerate(text):
            state = self._step(state, fold_char(ch))
            end = index + 1
            if state == _ROOT or not _at_boundary(text, end):
                continue
            node = state if self._terminal[state] else self._output[state]
            while node != _NONE and node != _ROOT:
                start = end - self._depth[node]
                if _at_boundary(text, start) and longest.get(start, -1) < end:
                    longest[start] = end
                node = self._output[node]

        spans: list[tuple[int, int]] = []
        covered = 0
        for start in sorted(longest):
            if start >= covered:
                spans.append((start, longest[start]))
                covered = longest[start]
        return spans

    def contains(self, text: str) -> bool:
        """Return True if any term occurs as a whole word in ``text``."""
        return bool(self.find_spans(text))
