"""A small ordered collection with the push/search/replace/delete operations
used for the instruction history."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Iterable, Iterator


class LinkedList:
    """Ordered sequence supporting insertion at both ends and predicate edits."""

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._items: deque[Any] = deque(items or ())

    def push(self, data: Any) -> None:
        """Insert at the front."""
        self._items.appendleft(data)

    def push_end(self, data: Any) -> None:
        """Append at the back."""
        self._items.append(data)

    def delete(self, ref: Any, cmp: Callable[[Any, Any], int]) -> None:
        """Remove every element for which cmp(element, ref) returns 0."""
        self._items = deque(item for item in self._items if cmp(item, ref) != 0)

    def search(self, value: Any, compare: Callable[[Any, Any], bool]) -> Any:
        """Return the first element for which compare(value, element) holds."""
        return next((item for item in self._items if compare(value, item)), None)

    def replace(self, value: Any, compare: Callable[[Any, Any], bool],
                new_data: Any) -> bool:
        """Replace the first matching element; report whether one was found."""
        for position, item in enumerate(self._items):
            if compare(value, item):
                self._items[position] = new_data
                return True
        return False

    def duplicate(self, copy_data: Callable[[Any], Any]) -> "LinkedList":
        """Return a new list holding copy_data applied to each element."""
        return LinkedList(copy_data(item) for item in self._items)

    def display(self, show: Callable[[Any], Any]) -> None:
        """Call show on each element in order."""
        for item in self._items:
            show(item)

    def clear(self, destroy: Callable[[Any], Any] | None = None) -> None:
        """Empty the list, handing each element to destroy first if given."""
        if destroy is not None:
            for item in self._items:
                destroy(item)
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)