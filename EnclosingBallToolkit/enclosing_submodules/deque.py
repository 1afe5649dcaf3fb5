# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Double-Ended Point Sequences

The enclosing ball engine only needs six operations on the caller's points:
length, emptiness and push/pop at both ends. This module provides:
1. Deque - the structural protocol the engine is written against
2. ArrayDeque - a NumPy ring buffer that can reorder a caller's (N, D) array in place
3. LinkedDeque - a thin adapter over collections.deque
4. as_deque - normalizes the accepted input types
"""

# ============================== IMPORTS ==================================== #

# Standard library imports
from collections import deque as _collections_deque
from typing import Any, Iterable, Iterator, Optional, Protocol, runtime_checkable

# Third-party imports
import numpy as np

# ============================== CONSTANTS ================================== #

MIN_CAPACITY = 8  # Smallest ring buffer allocated by ArrayDeque

# ============================== MODULE EXPORTS ============================= #

__all__ = [
    'Deque',
    'ArrayDeque',
    'LinkedDeque',
    'as_deque',
]

# ============================== PROTOCOL =================================== #

@runtime_checkable
class Deque(Protocol):
    """Minimum double-ended queue interface."""

    def __len__(self) -> int: ...

    def is_empty(self) -> bool: ...

    def pop_front(self) -> Optional[Any]: ...

    def pop_back(self) -> Optional[Any]: ...

    def push_front(self, value: Any) -> None: ...

    def push_back(self, value: Any) -> None: ...

# ============================ ARRAY RING BUFFER ============================ #

class ArrayDeque:
    """
    Ring buffer of points stored as rows of a NumPy array.

    Popped points are copies, so callers may keep them after the slot is reused.
    The buffer doubles when full.

    Args:
        points (Optional[Iterable]): Initial points, front to back. Anything
            np.array turns into shape (N, D).
        dimension (Optional[int]): Required when no points are given.

    Raises:
        ValueError: If the points do not form an (N, D) array, or if neither
            points nor dimension are provided.
    """

    __slots__ = ('_data', '_head', '_size', '_owner')

    def __init__(self, points: Optional[Iterable] = None,
                 dimension: Optional[int] = None) -> None:
        if points is None:
            if dimension is None:
                raise ValueError("Either points or dimension must be provided.")
            initial = np.empty((0, dimension))
        else:
            initial = np.array(list(points), dtype=float)
            if initial.size == 0 and initial.ndim < 2:
                if dimension is None:
                    raise ValueError("Dimension is required for an empty point set.")
                initial = np.empty((0, dimension))
            if initial.ndim != 2:
                raise ValueError("Points must form a 2D array of shape (N, D).")
            if dimension is not None and initial.shape[1] != dimension:
                raise ValueError(f"Points have dimension {initial.shape[1]}, "
                                 f"expected {dimension}.")

        size = len(initial)
        self._data = np.empty((max(size, MIN_CAPACITY), initial.shape[1]))
        self._data[:size] = initial
        self._head = 0
        self._size = size
        self._owner = None

    @classmethod
    def wrap(cls, array: np.ndarray) -> 'ArrayDeque':
        """
        Uses a caller's (N, D) array as storage without copying.

        As long as the deque never holds more than N points, the array remains
        the storage, and compact() leaves the final order in its rows.

        Raises:
            ValueError: If the array is not 2D, not real-valued or read-only.
        """
        if not isinstance(array, np.ndarray) or array.ndim != 2:
            raise ValueError("Points must be a 2D NumPy array of shape (N, D).")
        if not np.issubdtype(array.dtype, np.number):
            raise ValueError("Points must have a numeric dtype.")
        if np.issubdtype(array.dtype, np.complexfloating):
            raise ValueError("Points must have real coordinates, got a complex dtype.")
        if not array.flags.writeable:
            raise ValueError("Points array must be writeable to be reordered in place.")

        deque = cls.__new__(cls)
        deque._data = array
        deque._head = 0
        deque._size = len(array)
        deque._owner = array
        return deque

    @property
    def dimension(self) -> int:
        return self._data.shape[1]

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def _grow(self) -> None:
        ordered = self.to_array()
        data = np.empty((max(2 * self.capacity, MIN_CAPACITY), self.dimension),
                        dtype=self._data.dtype)
        data[:self._size] = ordered
        self._data = data
        self._head = 0

    def push_back(self, value) -> None:
        if self._size == self.capacity:
            self._grow()
        self._data[(self._head + self._size) % self.capacity] = value
        self._size += 1

    def push_front(self, value) -> None:
        if self._size == self.capacity:
            self._grow()
        self._head = (self._head - 1) % self.capacity
        self._data[self._head] = value
        self._size += 1

    def pop_back(self) -> Optional[np.ndarray]:
        if self._size == 0:
            return None
        self._size -= 1
        return self._data[(self._head + self._size) % self.capacity].copy()

    def pop_front(self) -> Optional[np.ndarray]:
        if self._size == 0:
            return None
        point = self._data[self._head].copy()
        self._head = (self._head + 1) % self.capacity
        self._size -= 1
        return point

    def to_array(self) -> np.ndarray:
        """Copy of the points front to back, shape (len, D)."""
        if self._size == 0:
            return self._data[:0].copy()
        indices = (self._head + np.arange(self._size)) % self.capacity
        return self._data[indices]

    def compact(self) -> None:
        """
        Rotates the storage so that the front point sits in row 0.

        For a wrapped array this writes the current order back into it.

        Raises:
            ValueError: If the deque outgrew the wrapped array.
        """
        if self._owner is not None and self._data is not self._owner:
            raise ValueError("Deque outgrew the wrapped array; use to_array() instead.")
        self._data[:self._size] = self.to_array()
        self._head = 0

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.to_array())

    def __repr__(self) -> str:
        return f"ArrayDeque(size={self._size}, dimension={self.dimension})"

# ============================= LINKED ADAPTER ============================== #

class LinkedDeque:
    """
    Deque contract over collections.deque (a doubly-linked list of blocks).

    Points are stored as given, so popping returns the same objects that were
    pushed.
    """

    __slots__ = ('_items',)

    def __init__(self, points: Optional[Iterable] = None) -> None:
        self._items = _collections_deque(points if points is not None else ())

    @classmethod
    def adopt(cls, items: _collections_deque) -> 'LinkedDeque':
        """Operates on an existing collections.deque in place."""
        if not isinstance(items, _collections_deque):
            raise TypeError("adopt() expects a collections.deque")
        deque = cls.__new__(cls)
        deque._items = items
        return deque

    @property
    def items(self) -> _collections_deque:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def push_back(self, value) -> None:
        self._items.append(value)

    def push_front(self, value) -> None:
        self._items.appendleft(value)

    def pop_back(self):
        return self._items.pop() if self._items else None

    def pop_front(self):
        return self._items.popleft() if self._items else None

    def __iter__(self):
        return iter(self._items)

    def __repr__(self) -> str:
        return f"LinkedDeque(size={len(self._items)})"

# =============================== ADAPTER =================================== #

def as_deque(points: Any) -> Deque:
    """
    Returns a Deque view of the caller's points that reorders them in place.

    Accepts:
        - any object implementing the Deque protocol (returned unchanged)
        - collections.deque (adapted by LinkedDeque)
        - np.ndarray of shape (N, D) (wrapped by ArrayDeque)

    Raises:
        TypeError: For any other type.
        ValueError: For arrays that cannot be reordered in place.
    """
    if isinstance(points, Deque):
        return points
    if isinstance(points, _collections_deque):
        return LinkedDeque.adopt(points)
    if isinstance(points, np.ndarray):
        return ArrayDeque.wrap(points)
    raise TypeError("Points must be a Deque, a collections.deque or a 2D NumPy array, "
                    f"got {type(points).__name__}.")
