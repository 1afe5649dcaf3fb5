# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Synthetic Point Generation

Randomly ordered point clouds with a known enclosing ball:
- Uniform points inside a ball
- Uniform points on a sphere (co-spherical input)
- Uniform points inside an axis-aligned cube
- Simplex vertices with a known circumscribed ball
"""

# ============================== IMPORTS ==================================== #

# Standard library imports
from typing import Optional, Union
import warnings

# Third-party imports
import numpy as np

# ============================== MODULE EXPORTS ============================= #

__all__ = [
    'generate_points_in_ball',
    'generate_points_on_sphere',
    'generate_points_in_cube',
    'generate_simplex',
]

# ============================== HELPERS ==================================== #

def _validate(num_points: int, dimension: int, offset) -> np.ndarray:
    """Checks the common arguments and returns the offset as a (D,) array."""
    if num_points < 0:
        raise ValueError("Number of points must be non-negative")
    if dimension < 1:
        raise ValueError("Dimension must be at least 1")
    if num_points == 0:
        warnings.warn("Zero points requested, the enclosing ball is undefined.")

    offset = np.zeros(dimension) if offset is None else np.asarray(offset, dtype=float)
    if offset.shape != (dimension,):
        raise ValueError(f"Offset must have shape ({dimension},), got {offset.shape}")
    return offset


def _rng(seed: Union[None, int, np.random.Generator]) -> np.random.Generator:
    return seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)


def _unit_directions(rng: np.random.Generator, num_points: int, dimension: int) -> np.ndarray:
    """Uniformly distributed unit vectors from normalized Gaussian samples."""
    directions = rng.standard_normal((num_points, dimension))
    norms = np.linalg.norm(directions, axis=1)

    # Redraw the (practically impossible) zero vectors
    degenerate = norms == 0
    while np.any(degenerate):
        directions[degenerate] = rng.standard_normal((np.sum(degenerate), dimension))
        norms = np.linalg.norm(directions, axis=1)
        degenerate = norms == 0

    return directions / norms[:, np.newaxis]

# ============================== GENERATORS ================================= #

def generate_points_in_ball(num_points: int,
                            dimension: int = 3,
                            radius: float = 1.0,
                            center: Optional[np.ndarray] = None,
                            seed: Union[None, int, np.random.Generator] = None,
                            verbose: bool = False) -> np.ndarray:
    """
    Generates points uniformly distributed inside a ball.

    Args:
        num_points (int): Number of points.
        dimension (int): Dimension D of the points.
        radius (float): Radius of the ball.
        center (Optional[np.ndarray]): Center of the ball, origin by default.
        seed: Seed or np.random.Generator for reproducibility.
        verbose (bool): Print generation statistics.

    Returns:
        np.ndarray: Array of shape (num_points, D) in random order.

    Raises:
        ValueError: For invalid inputs.
    """
    center = _validate(num_points, dimension, center)
    if radius < 0:
        raise ValueError("Radius must be non-negative")
    rng = _rng(seed)

    directions = _unit_directions(rng, num_points, dimension)
    # Radial density proportional to r^(D-1)
    radii = radius * rng.random(num_points) ** (1.0 / dimension)
    points = directions * radii[:, np.newaxis] + center

    if verbose:
        print(f"Generated {num_points:,} points inside a {dimension}-ball of radius {radius}")

    return points


def generate_points_on_sphere(num_points: int,
                              dimension: int = 3,
                              radius: float = 1.0,
                              center: Optional[np.ndarray] = None,
                              seed: Union[None, int, np.random.Generator] = None,
                              verbose: bool = False) -> np.ndarray:
    """
    Generates points uniformly distributed on the surface of a sphere.

    All points are co-spherical up to round-off, which makes this the hardest
    input for the circumscribed-ball solve.

    Args:
        num_points (int): Number of points.
        dimension (int): Dimension D of the points.
        radius (float): Radius of the sphere.
        center (Optional[np.ndarray]): Center of the sphere, origin by default.
        seed: Seed or np.random.Generator for reproducibility.
        verbose (bool): Print generation statistics.

    Returns:
        np.ndarray: Array of shape (num_points, D) in random order.
    """
    center = _validate(num_points, dimension, center)
    if radius < 0:
        raise ValueError("Radius must be non-negative")
    rng = _rng(seed)

    points = _unit_directions(rng, num_points, dimension) * radius + center

    if verbose:
        print(f"Generated {num_points:,} points on a {dimension}-sphere of radius {radius}")

    return points


def generate_points_in_cube(num_points: int,
                            dimension: int = 3,
                            edge: float = 1.0,
                            center: Optional[np.ndarray] = None,
                            seed: Union[None, int, np.random.Generator] = None,
                            verbose: bool = False) -> np.ndarray:
    """
    Generates points uniformly distributed inside an axis-aligned cube.

    The minimum enclosing ball of a dense sample approaches the ball through
    the cube's corners, of radius edge * sqrt(D) / 2.

    Args:
        num_points (int): Number of points.
        dimension (int): Dimension D of the points.
        edge (float): Edge length of the cube.
        center (Optional[np.ndarray]): Center of the cube, origin by default.
        seed: Seed or np.random.Generator for reproducibility.
        verbose (bool): Print generation statistics.

    Returns:
        np.ndarray: Array of shape (num_points, D) in random order.
    """
    center = _validate(num_points, dimension, center)
    if edge < 0:
        raise ValueError("Edge must be non-negative")
    rng = _rng(seed)

    points = (rng.random((num_points, dimension)) - 0.5) * edge + center

    if verbose:
        print(f"Generated {num_points:,} points inside a {dimension}-cube of edge {edge}")
        print(f"Expected enclosing radius: {edge * np.sqrt(dimension) / 2:.4f}\n")

    return points


def generate_simplex(dimension: int,
                     scale: float = 1.0,
                     offset: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Returns D+1 affinely independent points at distance `scale` from `offset`.

    The vertices are the unit basis vectors e_1..e_D and -e_1, scaled and
    shifted, so their circumscribed ball is centered on `offset` with radius
    `scale`. For D = 0 the single point of the 0-dimensional space is returned.

    Returns:
        np.ndarray: Array of shape (D+1, D).
    """
    if dimension < 0:
        raise ValueError("Dimension must be non-negative")
    if dimension == 0:
        return np.zeros((1, 0))

    offset = np.zeros(dimension) if offset is None else np.asarray(offset, dtype=float)
    vertices = np.vstack((np.eye(dimension), -np.eye(dimension)[:1]))
    return vertices * scale + offset
