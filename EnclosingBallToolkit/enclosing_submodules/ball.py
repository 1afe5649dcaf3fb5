# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Balls and Circumscribed Balls

Provides:
1. Ball - center and squared radius, with tolerant containment and ordering
2. with_bounds - the unique ball passing through at most D+1 boundary points
"""

# ============================== IMPORTS ==================================== #

# Standard library imports
import math
from typing import Optional, Sequence, Union

# Third-party imports
import numpy as np

# Local imports
from .exceptions import InvalidBallError

# ============================== CONSTANTS ================================== #

# Relative tolerance of containment: absorbs round-off for points that are
# mathematically on the surface without accepting genuinely exterior points.
EPSILON = math.sqrt(np.finfo(np.float64).eps)

DEBUG = False  # Global debug flag for additional output

# ============================== MODULE EXPORTS ============================= #

__all__ = [
    'EPSILON',
    'Ball',
    'contains',
    'distance_squared',
    'with_bounds',
]

# ============================== HELPERS ==================================== #

def distance_squared(point_a: np.ndarray, point_b: np.ndarray) -> float:
    """Squared Euclidean distance between two points."""
    offset = np.subtract(point_a, point_b, dtype=float)
    return float(offset @ offset)

# ================================ BALL ===================================== #

class Ball:
    """
    Ball with center and radius squared.

    Balls are ordered by their squared radius so that min() picks the
    smallest of several candidates. Ordering is only defined for finite radii.

    Args:
        center (array-like): Center point of shape (D,).
        radius_squared (float): Squared radius.
    """

    __slots__ = ('center', 'radius_squared')

    def __init__(self, center, radius_squared: float) -> None:
        center = np.array(center, dtype=float)
        if center.ndim != 1:
            raise ValueError("Center must be a 1D array of shape (D,).")
        center.flags.writeable = False
        self.center = center
        self.radius_squared = float(radius_squared)

    @property
    def dimension(self) -> int:
        return len(self.center)

    @property
    def radius(self) -> float:
        return math.sqrt(self.radius_squared)

    def is_finite(self) -> bool:
        return math.isfinite(self.radius_squared)

    def contains(self, point) -> bool:
        """
        Whether the ball contains `point`.

        The test is relative: a point at squared distance d2 > 0 is inside when
        radius_squared / d2 >= 1 - EPSILON.

        Raises:
            InvalidBallError: If the radius or the distance to the point is not finite.
        """
        if not math.isfinite(self.radius_squared):
            raise InvalidBallError(f"Ball radius squared is not finite: {self.radius_squared}.")
        distance = distance_squared(self.center, point)
        if not math.isfinite(distance):
            raise InvalidBallError(f"Distance squared to point is not finite: {distance}.")
        if distance == 0.0:
            return True
        return self.radius_squared / distance >= 1.0 - EPSILON

    def _key(self, other) -> Optional[float]:
        """Squared radius of `other`, or None if it is not a Ball."""
        if not isinstance(other, Ball):
            return None
        if not (self.is_finite() and other.is_finite()):
            raise InvalidBallError("Balls with non-finite radius cannot be ordered.")
        return other.radius_squared

    def __lt__(self, other: 'Ball') -> bool:
        key = self._key(other)
        return NotImplemented if key is None else self.radius_squared < key

    def __le__(self, other: 'Ball') -> bool:
        key = self._key(other)
        return NotImplemented if key is None else self.radius_squared <= key

    def __gt__(self, other: 'Ball') -> bool:
        key = self._key(other)
        return NotImplemented if key is None else self.radius_squared > key

    def __ge__(self, other: 'Ball') -> bool:
        key = self._key(other)
        return NotImplemented if key is None else self.radius_squared >= key

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ball):
            return NotImplemented
        return (self.radius_squared == other.radius_squared
                and np.array_equal(self.center, other.center))

    __hash__ = None

    def __repr__(self) -> str:
        center = ", ".join(f"{value:.6g}" for value in self.center)
        return f"Ball(center=[{center}], radius_squared={self.radius_squared:.6g})"


def contains(ball: Ball, point) -> bool:
    """Functional form of Ball.contains()."""
    return ball.contains(point)

# ======================= CIRCUMSCRIBED BALL SOLVER ========================= #

def with_bounds(bounds: Union[Sequence, np.ndarray],
                dimension: Optional[int] = None,
                verbose: bool = False) -> Optional[Ball]:
    """
    Returns the circumscribed ball passing through all `bounds`, if it exists.

    Solves for the center offset o = sum_i c_i * u_i, where u_i = bounds[i] - bounds[0],
    from the linear system 2 * <u_i, u_j> c = |u_i|^2 (each bound at the same
    distance from the center).

    Args:
        bounds: Ordered boundary points, 0 to D+1 of them, as a sequence of
            vectors, an array of shape (k, D) or a BoundaryStack.
        dimension (Optional[int]): Dimension D. Defaults to the length of the first bound.
        verbose (bool): If True, prints why a solve was rejected.

    Returns:
        Optional[Ball]: The circumscribed ball, or None if there are no bounds,
        too many bounds, or the bounds are affinely dependent (collinear,
        coplanar, duplicated, ...) to working precision.
    """
    if hasattr(bounds, 'as_array'):
        bounds = bounds.as_array()
    num_bounds = len(bounds)
    if num_bounds == 0:
        return None

    points = np.asarray(bounds, dtype=float)
    if points.ndim != 2:
        raise ValueError("Bounds must form a 2D array of shape (k, D).")
    if dimension is None:
        dimension = points.shape[1]
    if num_bounds > dimension + 1:
        if verbose:
            print(f"WB: {num_bounds} bounds exceed the {dimension + 1} a {dimension}-ball can have")
        return None

    origin = points[0]
    length = num_bounds - 1
    if length == 0:
        return Ball(origin, 0.0)

    # Offsets of the other bounds relative to the first one, shape (k, D)
    offsets = points[1:] - origin

    # Gram system
    matrix = 2.0 * (offsets @ offsets.T)
    vector = np.einsum('ij,ij->i', offsets, offsets)

    try:
        if np.linalg.matrix_rank(matrix) < length:
            raise np.linalg.LinAlgError("Singular matrix encountered in circumscribed ball solve.")
        inverse = np.linalg.inv(matrix)
    except np.linalg.LinAlgError as error:
        if verbose:
            print(f"WB: Affinely dependent bounds: {error}")
        return None

    coefficients = inverse @ vector
    center = coefficients @ offsets
    radius_squared = float(center @ center)

    if not (math.isfinite(radius_squared) and np.all(np.isfinite(center))):
        if verbose:
            print(f"WB: Non-finite solve result, radius squared = {radius_squared}")
        return None

    if DEBUG:
        print(f"WB: Bounds: {num_bounds}, coefficients: {coefficients}, "
              f"radius squared: {radius_squared:.6e}")

    return Ball(origin + center, radius_squared)
