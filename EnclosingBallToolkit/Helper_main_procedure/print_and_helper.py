# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Reporting and Verification Utilities

This module provides functions for:
- Ball parameter reporting
- Verification of an enclosing ball against its point set
- Accuracy statistics over repeated computations
"""

# Standard library imports
from typing import Any, Dict, Iterable, Optional, Sequence

# Third-party imports
import numpy as np
from scipy.spatial.distance import cdist

# Local imports
from ..enclosing_submodules.ball import EPSILON, Ball

__all__ = [
    # Core Printing Functions
    'print_ball',
    'print_balls',

    # Verification
    'evaluate_enclosure',
    'relative_accuracy',

    # Statistical Reporting
    'calculate_and_print_statistics',
]

# ========================== Core Printing Functions ========================== #

def print_ball(ball: Ball,
               title: Optional[str] = None,
               label: Optional[str] = None,
               reference: Optional[float] = None) -> None:
    """
    Prints the center and radius of a ball, and its accuracy if a reference
    squared radius is provided.

    Args:
        ball (Ball): The ball to print.
        title (str, optional): A title to print before the ball details.
        label (str, optional): A label to prepend to the ball details (e.g., "Sample 1").
        reference (float, optional): Expected squared radius.

    Raises:
        TypeError: If `ball` is not a Ball.
    """
    # Input validation
    if not isinstance(ball, Ball):
        raise TypeError("ball must be a Ball instance")

    # Print the title if provided
    if title:
        print(title)

    # Print the label if provided
    print(f"{f'{label}: ' if label else ''}", end='')

    center = ", ".join(f"{value:.4f}" for value in ball.center)
    print(
        f"Center = ({center}), "
        f"Radius = {ball.radius:.4f}"
        f"{f', Accuracy: 1{relative_accuracy(ball, reference):+.1e}' if reference is not None else ''}"
    )

def print_balls(balls: Sequence[Ball],
                title: Optional[str] = None,
                label: Optional[str] = None,
                reference: Optional[float] = None) -> None:
    """
    Print details for multiple balls, enumerated from 0 to n-1.

    Args:
        balls (Sequence[Ball]): The balls to print.
        title (Optional[str]): A title to print before the ball details.
        label (Optional[str]): A label to prepend to each ball's details (e.g., "Sample").
        reference (Optional[float]): Expected squared radius.
    """
    # Print the title if provided
    if title:
        print(title)

    for i, ball in enumerate(balls):
        lbl = f"{label} {i}" if label else str(i)
        print_ball(ball, label=lbl, reference=reference)

# ============================== Verification =============================== #

def relative_accuracy(ball: Ball, radius_squared: float) -> float:
    """
    Relative deviation of the ball's squared radius from an expected one.

    Returns:
        float: ball.radius_squared / radius_squared - 1.

    Raises:
        ValueError: If the expected squared radius is not positive.
    """
    if radius_squared <= 0:
        raise ValueError("Expected radius squared must be positive")
    return ball.radius_squared / radius_squared - 1.0

def evaluate_enclosure(points: Any,
                       ball: Ball,
                       epsilon: Optional[float] = None,
                       verbose: bool = False) -> Dict[str, Any]:
    """
    Checks how well `ball` encloses `points`.

    Args:
        points: Points as an (N, D) array or an iterable of (D,) vectors.
        ball (Ball): The enclosing ball to verify.
        epsilon (Optional[float]): Absolute distance tolerance. Defaults to
            EPSILON * max(1, radius).
        verbose (bool): Print a short summary.

    Returns:
        Dict[str, Any]: A dictionary with
            - 'distances': distance of every point to the center
            - 'max_excess': largest distance minus radius
            - 'all_enclosed': whether every point lies within radius + epsilon
            - 'boundary_count': number of points within epsilon of the surface

    Raises:
        ValueError: If the points do not match the ball's dimension.
    """
    points = _as_point_array(points)
    if points.shape[1] != ball.dimension:
        raise ValueError(f"Points have dimension {points.shape[1]}, "
                         f"ball has dimension {ball.dimension}")

    radius = ball.radius
    if epsilon is None:
        epsilon = EPSILON * max(1.0, radius)

    distances = cdist(points, ball.center[np.newaxis, :]).ravel()
    deviations = distances - radius

    result = {
        'distances': distances,
        'max_excess': float(np.max(deviations)) if len(deviations) else -radius,
        'all_enclosed': bool(np.all(deviations <= epsilon)),
        'boundary_count': int(np.sum(np.abs(deviations) <= epsilon)),
    }

    if verbose:
        print(f"EVAL: Points = {len(points)}, Max excess = {result['max_excess']:.3e}, "
              f"On boundary = {result['boundary_count']}, "
              f"All enclosed = {result['all_enclosed']}")

    return result

def _as_point_array(points: Iterable) -> np.ndarray:
    if hasattr(points, 'to_array'):
        points = points.to_array()
    array = np.array(list(points), dtype=float)
    if array.ndim != 2:
        raise ValueError("Points must form a 2D array of shape (N, D).")
    return array

# ========================== Statistical Reporting ========================== #

def calculate_and_print_statistics(accuracies: np.ndarray) -> Dict[str, float]:
    """
    Calculates and prints the mean, standard deviation and standard error of
    the mean (SEM) of relative accuracies from repeated computations.

    Args:
        accuracies (np.ndarray): Relative accuracies (see relative_accuracy).

    Returns:
        Dict[str, float]: 'mean', 'std' and 'sem'.

    Raises:
        ValueError: If fewer than two values are given.
    """
    accuracies = np.asarray(accuracies, dtype=float)
    if accuracies.ndim != 1 or len(accuracies) < 2:
        raise ValueError("At least two accuracies are required.")

    num_samples = len(accuracies)
    mean, std = np.mean(accuracies), np.std(accuracies, ddof=1)
    sem = std / np.sqrt(num_samples)

    print("\nStatistics for Accuracies:")
    print(f"Accuracy: Mean = {mean:.3e}, Std Dev = {std:.3e}, SEM = {sem:.3e}")

    return {'mean': float(mean), 'std': float(std), 'sem': float(sem)}
