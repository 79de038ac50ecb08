"""Bounded LIFO container."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

from solitaire_engine.exceptions import IllegalMove

T = TypeVar("T")


class BoundedStack(Generic[T]):
    """Single-ended stack backed by a list.

    The last list slot is the top. Elements are never inserted or removed
    anywhere but the top. Copies share element instances with the original;
    only the sequence itself is owned by the new container.
    """

    def __init__(self, items: Iterable[T] | None = None, capacity: int | None = None):
        """Initialize the stack.

        Args:
            items: Initial elements, bottom first.
            capacity: Maximum number of elements (None for unbounded).
        """
        self.capacity = capacity
        self._items: list[T] = []
        if items is not None:
            for item in items:
                self.push(item)

    def push(self, value: T) -> None:
        """Add a value to the top of the stack."""
        if self.capacity is not None and len(self._items) >= self.capacity:
            raise IllegalMove(f"Stack is full (capacity {self.capacity})")
        self._items.append(value)

    def pop(self) -> T | None:
        """Remove and return the top value, or None if the stack is empty."""
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> T | None:
        """Return the top value without removing it, or None if empty."""
        if not self._items:
            return None
        return self._items[-1]

    def size(self) -> int:
        """Get number of elements."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Check if the stack has no elements."""
        return not self._items

    def clear(self) -> None:
        """Remove all elements."""
        self._items.clear()

    def reverse(self) -> None:
        """Reverse the order of all elements in place."""
        self._items.reverse()

    def _new_empty(self) -> BoundedStack[T]:
        return BoundedStack()

    def copy(self) -> BoundedStack[T]:
        """Return an independent stack with the same order and elements."""
        new = self._new_empty()
        new._items = list(self._items)
        return new

    def reverse_copy(self) -> BoundedStack[T]:
        """Return an independent stack with the elements in reversed order."""
        new = self._new_empty()
        new._items = self._items[::-1]
        return new

    def append_stack(self, other: BoundedStack[T] | None) -> None:
        """Copy the elements of another stack onto this one.

        The bottom of ``other`` lands directly on the previous top of this
        stack and its order is preserved. ``other`` is left untouched, so
        callers that intend to move the elements must clear it themselves
        (or use :meth:`move_onto`).
        """
        if other is None or other.is_empty():
            return
        if self.capacity is not None and len(self._items) + len(other) > self.capacity:
            raise IllegalMove(f"Stack is full (capacity {self.capacity})")
        for item in list(other._items):
            self.push(item)

    def copy_onto(self, src: BoundedStack[T]) -> None:
        """Non-destructive append of ``src`` onto this stack."""
        self.append_stack(src)

    def move_onto(self, src: BoundedStack[T]) -> None:
        """Append ``src`` onto this stack and clear ``src``."""
        self.append_stack(src)
        src.clear()

    def bottom(self) -> T | None:
        """Return the bottom value without removing it, or None if empty."""
        if not self._items:
            return None
        return self._items[0]

    def __iter__(self) -> Iterator[T]:
        # Bottom to top
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
