# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Minimum Enclosing Ball

Implements Welzl's recursive algorithm with move-to-front heuristic:
1. Take a point from the back of the sequence
2. Compute the ball enclosing the remaining points with the current bounds
3. Keep that ball if it contains the point (point moves back to the back),
   otherwise the point joins the bounds for a second branch and afterwards
   moves to the front of the sequence

Recursion depth grows with the number of points. A stack-growth guard keeps
track of the interpreter's remaining recursion headroom and, once it drops into
the red zone, continues the very same computation on a heap-allocated frame
stack.

Reference:
E. Welzl, "Smallest enclosing disks (balls and ellipsoids)",
New Results and New Trends in Computer Science, LNCS 555 (1991) 359-370.
"""

# ============================== IMPORTS ==================================== #

# Standard library imports
import sys
import warnings
from typing import Any, List, Optional

# Third-party imports
import numpy as np

# Local imports
from .ball import Ball, with_bounds
from .boundary import BoundaryStack
from .deque import ArrayDeque, Deque, as_deque
from .exceptions import EmptyPointSetError, NumericalInstabilityError

# ============================== CONSTANTS ================================== #

DEBUG = False  # Global debug flag for additional output

# -------------------- STACK GROWTH PARAMETERS -------------------- #
GROW_STACK = True            # Continue on a heap frame stack near the recursion limit
RED_ZONE_BASE = 64           # Frames reserved below the recursion limit
RED_ZONE_PER_DIMENSION = 2   # Extra reserved frames per dimension
FRAMES_PER_LEVEL = 2         # Interpreter frames used by one recursion level

_FIRST_BRANCH = 0   # Ball of the remaining points without the popped one
_SECOND_BRANCH = 1  # Ball of the remaining points with the popped one as bound

# ============================== MODULE EXPORTS ============================= #

__all__ = [
    'GROW_STACK',
    'red_zone',
    'enclosing_points',
    'enclosing_points_with_bounds',
]

# ============================ STACK GROWTH GUARD =========================== #

def red_zone(dimension: int) -> int:
    """
    Number of interpreter frames that must remain available below the
    recursion limit before recursing one level deeper.
    """
    return RED_ZONE_BASE + RED_ZONE_PER_DIMENSION * dimension


def _frame_depth() -> int:
    """Number of frames on the current thread's call stack."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def _native_depth_limit(dimension: int) -> int:
    """Recursion levels that fit natively before entering the red zone."""
    headroom = sys.getrecursionlimit() - _frame_depth()
    return max(0, (headroom - red_zone(dimension)) // FRAMES_PER_LEVEL)


def _descend(points: Deque, bounds: BoundaryStack,
             depth: int, max_depth: Optional[int]) -> Optional[Ball]:
    # Guard: past max_depth the remaining subproblem runs on the heap.
    if max_depth is not None and depth >= max_depth:
        return _enclose_iteratively(points, bounds)
    return _enclose_recursively(points, bounds, depth, max_depth)

# =========================== RECURSIVE ALGORITHM =========================== #

def _enclose_recursively(points: Deque, bounds: BoundaryStack,
                         depth: int, max_depth: Optional[int]) -> Optional[Ball]:
    if bounds.is_full() or points.is_empty():
        return with_bounds(bounds, bounds.dimension)

    # Take point from back
    point = points.pop_back()
    enclosed = False
    bounded = False

    try:
        # Branch with one point less
        ball = _descend(points, bounds, depth + 1, max_depth)
        if ball is not None and ball.contains(point):
            enclosed = True
            points.push_back(point)
            return ball

        # Branch with one point less and one bound more
        bounds.push(point)
        bounded = True
        ball = _descend(points, bounds, depth + 1, max_depth)
    finally:
        # The point goes back into the sequence even if a branch raised
        if bounded:
            bounds.pop()
        if not enclosed:
            # Move to front
            points.push_front(point)
    return ball


def _enclose_iteratively(points: Deque, bounds: BoundaryStack) -> Optional[Ball]:
    """
    Same computation as _enclose_recursively() with an explicit frame stack.

    Each frame holds the popped point and the branch it is waiting on. The
    sequence and the bounds are left exactly as the recursion would leave them.
    """
    frames: List[List[Any]] = []
    ball = None
    descending = True

    try:
        while True:
            if descending:
                if not (bounds.is_full() or points.is_empty()):
                    frames.append([points.pop_back(), _FIRST_BRANCH])
                    continue
                ball = with_bounds(bounds, bounds.dimension)
                descending = False

            if not frames:
                return ball

            frame = frames[-1]
            point, branch = frame
            if branch == _FIRST_BRANCH:
                if ball is not None and ball.contains(point):
                    points.push_back(point)
                    frames.pop()
                else:
                    bounds.push(point)
                    frame[1] = _SECOND_BRANCH
                    descending = True
            else:
                bounds.pop()
                points.push_front(point)
                frames.pop()
    finally:
        # Unwind pending frames like the recursion does when a branch raised
        while frames:
            point, branch = frames.pop()
            if branch == _SECOND_BRANCH:
                bounds.pop()
            points.push_front(point)

# ============================== PUBLIC API ================================= #

def _dimension_of(points: Deque) -> int:
    dimension = getattr(points, 'dimension', None)
    if dimension is None:
        # Peek at the back point without changing the order
        point = points.pop_back()
        points.push_back(point)
        shape = np.shape(point)
        if len(shape) != 1:
            raise ValueError(f"Points must be vectors of shape (D,), got shape {shape}.")
        dimension = shape[0]
    return dimension


def _encloses_all(points: Deque, ball: Ball) -> bool:
    """Whether `ball` contains every point. Leaves the order unchanged."""
    enclosed = True
    for _ in range(len(points)):
        point = points.pop_front()
        points.push_back(point)
        enclosed = enclosed and ball.contains(point)
    return enclosed


def enclosing_points_with_bounds(points: Deque, bounds: BoundaryStack,
                                 grow_stack: bool = GROW_STACK) -> Optional[Ball]:
    """
    Returns the minimum ball enclosing `points` with all `bounds` on its surface.

    Single attempt of the algorithm without capacity retries. Returns None if
    the circumscribed-ball solve fails on the way.

    Args:
        points (Deque): Points to enclose, reordered in place.
        bounds (BoundaryStack): Points required on the surface. Left unchanged.
        grow_stack (bool): Whether to guard the recursion against the interpreter's
            recursion limit. Without the guard large inputs raise RecursionError.
    """
    max_depth = _native_depth_limit(bounds.dimension) if grow_stack else None
    return _descend(points, bounds, 0, max_depth)


def enclosing_points(points: Any,
                     grow_stack: bool = GROW_STACK,
                     verbose: bool = False) -> Ball:
    """
    Returns the minimum ball enclosing `points`.

    Points should be randomly permuted beforehand to get the expected linear
    running time. The sequence is permuted in place: points found on the
    boundary are moved to the front, enclosed ones to the back. The order does
    not converge to a reproducible one, but reusing the sequence, with enclosed
    points added to the front and new outside points to the back, speeds up
    further calls significantly.

    If no ball can be found with D+1 bounds because of round-off, the
    computation is retried with fewer simultaneous bounds.

    Args:
        points: A Deque, a collections.deque of (D,) vectors or a NumPy array of
            shape (N, D). Reordered in place.
        grow_stack (bool): Continue on a heap frame stack once the recursion
            approaches the interpreter's recursion limit. If False, inputs
            deeper than the limit raise RecursionError.
        verbose (bool): If True, prints progress information.

    Returns:
        Ball: The minimum enclosing ball.

    Raises:
        EmptyPointSetError: If there are no points.
        NumericalInstabilityError: If every boundary capacity failed.
        TypeError: If `points` is not a supported sequence type.
    """
    sequence = as_deque(points)
    if sequence.is_empty():
        raise EmptyPointSetError("Cannot compute the enclosing ball of an empty point set.")

    dimension = _dimension_of(sequence)
    max_depth = _native_depth_limit(dimension) if grow_stack else None

    if verbose:
        print(f"MEB: Points = {len(sequence)}, Dimension = {dimension}, "
              f"Native depth = {'unbounded' if max_depth is None else max_depth}")

    ball = None
    try:
        for capacity in range(dimension + 1, -1, -1):
            bounds = BoundaryStack(dimension, capacity)
            ball = _descend(sequence, bounds, 0, max_depth)
            # Fewer bounds than D+1 may pin down a ball that misses some points
            if ball is not None and capacity <= dimension and not _encloses_all(sequence, ball):
                if verbose:
                    print(f"MEB: Capacity = {capacity} gave a ball not enclosing all points")
                ball = None
            if ball is not None:
                if verbose:
                    print(f"MEB: Capacity = {capacity}, Radius squared = {ball.radius_squared:.6e}")
                break
            if capacity > 0:
                warnings.warn(f"No enclosing ball found with {capacity} bounds, "
                              f"retrying with {capacity - 1}.", RuntimeWarning)
    finally:
        # Write the final order back into the caller's array
        if isinstance(points, np.ndarray) and isinstance(sequence, ArrayDeque):
            sequence.compact()

    if ball is None:
        raise NumericalInstabilityError(
            f"No enclosing ball found for {len(sequence)} points with any boundary capacity.")

    if DEBUG:
        print(f"MEB: Center = {ball.center}, Radius = {ball.radius:.6e}")

    return ball
