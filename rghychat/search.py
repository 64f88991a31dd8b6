"""Prefix tree for word lookup, auto-completion and id search."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field


@dataclass
class _Vertex:
    next: dict[str, _Vertex] = field(default_factory=dict)
    output: bool = False
    frequency: int = 0
    ids: set[int] = field(default_factory=set)


class SearchEngine:
    """A trie that ranks completions by how many words share each branch."""

    def __init__(self) -> None:
        self._root = _Vertex()

    def _insert(self, word: str) -> _Vertex:
        node = self._root
        for char in word:
            node = node.next.setdefault(char, _Vertex())
            node.frequency += 1
        node.output = True
        return node

    def _find(self, word: str) -> _Vertex | None:
        node = self._root
        for char in word:
            node = node.next.get(char)
            if node is None:
                return None
        return node

    def add_word(self, word: str) -> None:
        self._insert(word)

    def add_word_with_id(self, word: str, item_id: int) -> None:
        self._insert(word).ids.add(item_id)

    def search(self, word: str) -> bool:
        """Return True if ``word`` was added as a whole word."""
        node = self._find(word)
        return node is not None and node.output

    def auto_complete(self, word: str, limit: int) -> list[str]:
        """Return up to ``limit`` words starting with ``word``.

        Busier branches are explored first.
        """
        node = self._find(word)
        if node is None:
            return []
        results: list[str] = []
        self._complete(node, word, results, limit)
        return results

    def _complete(self, node: _Vertex, prefix: str, results: list[str], limit: int) -> None:
        if len(results) >= limit:
            return
        if node.output:
            results.append(prefix)
        ranked = sorted(node.next.items(), key=lambda item: -item[1].frequency)
        for char, child in ranked:
            self._complete(child, prefix + char, results, limit)

    def get_ids(self, word: str) -> set[int]:
        """Return the ids of every word that starts with ``word``."""
        node = self._find(word)
        result: set[int] = set()
        if node is None:
            return result
        pending = [node]
        while pending:
            current = pending.pop()
            if current.output:
                result |= current.ids
            pending.extend(current.next.values())
        return result


_DEMO_WORDS = ("hello", "hi", "word", "car", "cat", "cut", "care")
_DEMO_QUERIES = (("c", 6), ("h", 5), ("m", 5))


def main(argv: list[str] | None = None) -> int:
    """Fill a trie with sample words and print a few completions."""
    engine = SearchEngine()
    for word in _DEMO_WORDS:
        engine.add_word(word)
    for prefix, limit in _DEMO_QUERIES:
        for completion in engine.auto_complete(prefix, limit):
            sys.stdout.write(completion + "\n")
    return 0