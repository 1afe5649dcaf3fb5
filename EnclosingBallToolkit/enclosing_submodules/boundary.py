# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Bounded Boundary Stack

Holds the points currently assumed to lie on the surface of the candidate
ball. D+1 affinely independent points pin down a sphere in D dimensions, so
the storage is a preallocated (D+1, D) array that is never resized.
"""

# ============================== IMPORTS ==================================== #

# Standard library imports
from typing import Iterator, Optional

# Third-party imports
import numpy as np

__all__ = ['BoundaryStack']

# ============================ BOUNDARY STACK =============================== #

class BoundaryStack:
    """
    Fixed-capacity stack of boundary points.

    Args:
        dimension (int): Dimension D of the points.
        capacity (Optional[int]): Effective capacity in 0..D+1. Defaults to D+1.
            A smaller capacity is used when retrying after numerical failures.

    Raises:
        ValueError: If the dimension is negative or the capacity is out of range.
    """

    __slots__ = ('_data', '_size', '_capacity')

    def __init__(self, dimension: int, capacity: Optional[int] = None) -> None:
        if dimension < 0:
            raise ValueError(f"Dimension must be non-negative, got {dimension}.")
        max_capacity = dimension + 1
        if capacity is None:
            capacity = max_capacity
        if not 0 <= capacity <= max_capacity:
            raise ValueError(f"Capacity must be in 0..{max_capacity}, got {capacity}.")

        self._data = np.zeros((max_capacity, dimension))
        self._size = 0
        self._capacity = capacity

    @property
    def dimension(self) -> int:
        return self._data.shape[1]

    @property
    def capacity(self) -> int:
        """Effective capacity of this stack."""
        return self._capacity

    @property
    def max_capacity(self) -> int:
        """Natural capacity D+1."""
        return self._data.shape[0]

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def is_full(self) -> bool:
        return self._size >= self._capacity

    def push(self, point: np.ndarray) -> None:
        """
        Adds a boundary point.

        Raises:
            OverflowError: If the stack already holds `capacity` points.
        """
        if self.is_full():
            raise OverflowError(f"Boundary stack is full ({self._capacity} points).")
        self._data[self._size] = point
        self._size += 1

    def pop(self) -> Optional[np.ndarray]:
        """Removes and returns the last boundary point, or None if empty."""
        if self._size == 0:
            return None
        self._size -= 1
        return self._data[self._size].copy()

    def as_array(self) -> np.ndarray:
        """Read-only view of the current points in push order, shape (len, D)."""
        view = self._data[:self._size]
        view.flags.writeable = False
        return view

    def __getitem__(self, index):
        return self.as_array()[index]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.as_array())

    def __repr__(self) -> str:
        return (f"BoundaryStack(dimension={self.dimension}, "
                f"capacity={self._capacity}, size={self._size})")
