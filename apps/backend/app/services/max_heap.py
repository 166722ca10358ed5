"""
max_heap.py — Binary max-heap for hierarchical ranking of locations.

The heap is a dense list read as a complete binary tree:
  children of i → 2i + 1, 2i + 2
  parent of i   → (i - 1) // 2
and every parent's key is ≥ both children's keys after each mutating call.

Nodes are ordered by `key(node)`, by default `node.average_score` (HeapNode).
Nodes are treated as immutable snapshots — the heap only moves references.
The backing list never leaves this class; callers get copies.

Complexity:
  insert / extract_max      O(log n)
  peek / size               O(1)
  build_heap                O(n log n)  (repeated insertion)
  to_sorted_descending      O(n log n)  (on a copy; heap unchanged)
  to_levels                 O(n)

Ties: equal keys are never swapped, so their relative order after a series
of inserts / extracts is whatever the sift paths leave behind. Only "every
strictly higher key comes before every strictly lower key" is guaranteed by
to_sorted_descending().
"""

from __future__ import annotations

from collections.abc import Iterable
from operator import attrgetter
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class MaxHeap(Generic[T]):
    """Max-heap of nodes keyed by a numeric score."""

    def __init__(self, key: Callable[[T], float] = attrgetter("average_score")) -> None:
        self._key = key
        self._heap: list[T] = []

    # ── Index helpers ─────────────────────────────────────────────────────────

    @staticmethod
    def _parent(index: int) -> int:
        return (index - 1) // 2

    @staticmethod
    def _left(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def _right(index: int) -> int:
        return 2 * index + 2

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    # ── Sifting ───────────────────────────────────────────────────────────────

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = self._parent(index)
            if self._key(self._heap[parent]) < self._key(self._heap[index]):
                self._swap(parent, index)
                index = parent
            else:
                break

    def _sift_down(self, index: int = 0) -> None:
        n = len(self._heap)
        while True:
            left, right = self._left(index), self._right(index)
            largest = index
            if left < n and self._key(self._heap[left]) > self._key(self._heap[largest]):
                largest = left
            if right < n and self._key(self._heap[right]) > self._key(self._heap[largest]):
                largest = right
            if largest == index:
                break
            self._swap(index, largest)
            index = largest

    # ── Public operations ─────────────────────────────────────────────────────

    def insert(self, node: T) -> None:
        self._heap.append(node)
        self._sift_up(len(self._heap) - 1)

    def extract_max(self) -> Optional[T]:
        """Remove and return the highest-keyed node, or None when empty."""
        if not self._heap:
            return None
        if len(self._heap) == 1:
            return self._heap.pop()
        top = self._heap[0]
        self._heap[0] = self._heap.pop()
        self._sift_down(0)
        return top

    def peek(self) -> Optional[T]:
        return self._heap[0] if self._heap else None

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def build_heap(self, nodes: Iterable[T]) -> None:
        """Discard the current contents and insert `nodes` in order."""
        self._heap = []
        for node in nodes:
            self.insert(node)

    def to_sorted_descending(self) -> list[T]:
        """Return all nodes max-first without modifying this heap."""
        scratch: MaxHeap[T] = MaxHeap(key=self._key)
        scratch._heap = list(self._heap)
        ordered: list[T] = []
        while scratch.size():
            ordered.append(scratch.extract_max())
        return ordered

    def to_levels(self) -> list[list[T]]:
        """Split the array into tree levels: level k holds 2**k nodes (last may be short)."""
        levels: list[list[T]] = []
        start, width = 0, 1
        while start < len(self._heap):
            levels.append(self._heap[start:start + width])
            start += width
            width *= 2
        return levels

    def is_valid(self) -> bool:
        """True when every parent's key is ≥ both of its children's keys."""
        return all(
            self._key(self._heap[self._parent(i)]) >= self._key(self._heap[i])
            for i in range(1, len(self._heap))
        )

    def __repr__(self) -> str:
        return f"MaxHeap(size={len(self._heap)}, top={self.peek()!r})"
