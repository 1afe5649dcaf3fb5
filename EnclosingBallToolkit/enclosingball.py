# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Minimum Enclosing Ball Toolkit

This module gathers the public functionality:

- Circumscribed ball of up to D+1 boundary points
- Minimum ball enclosing an arbitrary point set (Welzl's algorithm)
- Point sequences the algorithm reorders in place
- Synthetic data generation
- Repeated sampling, verification and reporting
- Visualization
"""


# ============================ IMPORTS ============================ #
# Standard library imports
from typing import Any, List, Tuple

# Third-party imports
from tqdm import tqdm

# Local imports
from .enclosing_submodules.exceptions import (EnclosingBallError, EmptyPointSetError,
                                              NumericalInstabilityError, InvalidBallError)
from .enclosing_submodules.ball import EPSILON, Ball, contains, distance_squared, with_bounds
from .enclosing_submodules.boundary import BoundaryStack
from .enclosing_submodules.deque import Deque, ArrayDeque, LinkedDeque, as_deque
from .enclosing_submodules.enclosing import (GROW_STACK, red_zone, enclosing_points,
                                             enclosing_points_with_bounds)
from .Helper_main_procedure.generate import (generate_points_in_ball, generate_points_on_sphere,
                                             generate_points_in_cube, generate_simplex)
from .Helper_main_procedure.print_and_helper import (print_ball, print_balls,
                                                     evaluate_enclosure, relative_accuracy,
                                                     calculate_and_print_statistics)
from .Helper_main_procedure.plot_utils import plot_commons, plot_points, plot_ball

# ============================ CONSTANTS ============================ #

DEFAULT_SAMPLES = 8    # Repeated computations in sample_enclosing_balls

# ============================ EXPORT LIST ============================ #
__all__ = [
    # Errors
    'EnclosingBallError',
    'EmptyPointSetError',
    'NumericalInstabilityError',
    'InvalidBallError',

    # Balls
    'EPSILON',
    'Ball',
    'contains',
    'distance_squared',
    'with_bounds',

    # Sequences
    'BoundaryStack',
    'Deque',
    'ArrayDeque',
    'LinkedDeque',
    'as_deque',

    # Enclosing
    'GROW_STACK',
    'red_zone',
    'enclosing_points',
    'enclosing_points_with_bounds',
    'sample_enclosing_balls',

    # Data Generation
    'generate_points_in_ball',
    'generate_points_on_sphere',
    'generate_points_in_cube',
    'generate_simplex',

    # Reporting
    'print_ball',
    'print_balls',
    'evaluate_enclosure',
    'relative_accuracy',
    'calculate_and_print_statistics',

    # Visualization
    'plot_commons',
    'plot_points',
    'plot_ball',
]

# ============================ SAMPLING PROCEDURE ============================ #

def sample_enclosing_balls(points: Any,
                           samples: int = DEFAULT_SAMPLES,
                           grow_stack: bool = GROW_STACK,
                           progress: bool = False,
                           verbose: bool = False) -> Tuple[Ball, List[Ball]]:
    """
    Computes the enclosing ball of the same points several times and keeps the best.

    Every run reuses the order left behind by the previous one, so later runs
    are faster. For nearly co-spherical points the runs may differ by round-off;
    the smallest ball is returned.

    Args:
        points: Point sequence accepted by enclosing_points(), reordered in place.
        samples (int): Number of runs.
        grow_stack (bool): Passed on to enclosing_points().
        progress (bool): Show a tqdm progress bar.
        verbose (bool): Print every sample.

    Returns:
        Tuple[Ball, List[Ball]]: The smallest ball and all sampled balls in order.

    Raises:
        ValueError: If samples is not a positive integer.
    """
    if not isinstance(samples, int) or samples < 1:
        raise ValueError("samples must be a positive integer")

    sequence = as_deque(points)

    balls = []
    try:
        for sample in tqdm(range(samples), total=samples, desc="Sampling enclosing balls",
                           disable=not progress):
            ball = enclosing_points(sequence, grow_stack=grow_stack)
            balls.append(ball)
            if verbose:
                print(f"SMP: Sample {sample}: Radius squared = {ball.radius_squared:.10e}")
    finally:
        # Write the final order back into a wrapped array
        if isinstance(sequence, ArrayDeque) and sequence is not points:
            sequence.compact()

    best = min(balls)
    if verbose:
        print(f"SMP: Best radius squared = {best.radius_squared:.10e}")

    return best, balls
