# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# Unit tests for the minimum enclosing ball

"""
Test Suite for Minimum Enclosing Ball

Contains:
- Small configurations with a known enclosing ball
- Properties of random point clouds (enclosure, minimality, order)
- Recursion guard and heap continuation
- Boundary capacity retries and error handling
"""

# ============================ IMPORTS ============================ #
# Standard library imports
import io
import sys
import unittest
from collections import deque
from unittest.mock import patch

# Third-party imports
import numpy as np
from numpy.testing import assert_allclose, assert_array_equal

from EnclosingBallToolkit import (EPSILON, ArrayDeque, BoundaryStack, EmptyPointSetError,
                                  EnclosingBallError, InvalidBallError, LinkedDeque,
                                  NumericalInstabilityError,
                                  enclosing_points, enclosing_points_with_bounds,
                                  evaluate_enclosure, generate_points_in_ball,
                                  generate_points_in_cube, red_zone, with_bounds)
from EnclosingBallToolkit.enclosing_submodules import enclosing as enclosing_module

# ============================ CONSTANTS ============================ #

OFFSET_3D = np.array([-3.0, 7.0, 4.8])
ENCLOSING_MODULE = 'EnclosingBallToolkit.enclosing_submodules.enclosing'

# ============================ HELPERS ============================ #

def sorted_rows(points: np.ndarray) -> np.ndarray:
    """Rows sorted lexicographically, to compare point multisets."""
    points = np.asarray(points)
    return points[np.lexsort(points.T[::-1])]


def tolerance(ball) -> float:
    return EPSILON * max(1.0, ball.radius)

# ========================= TEST SMALL CONFIGURATIONS ========================= #

class TestEnclosingSmallSets(unittest.TestCase):
    """Unit tests for enclosing_points() on configurations with a known result."""

    def test_empty_array(self):
        """Test that an empty point set raises EmptyPointSetError."""
        with self.assertRaises(EmptyPointSetError):
            enclosing_points(np.empty((0, 3)))

    def test_empty_deque(self):
        """Test that an empty collections.deque raises EmptyPointSetError."""
        with self.assertRaises(EmptyPointSetError):
            enclosing_points(deque())

    def test_empty_error_hierarchy(self):
        """Test that EmptyPointSetError is both a toolkit error and a ValueError."""
        self.assertTrue(issubclass(EmptyPointSetError, EnclosingBallError))
        self.assertTrue(issubclass(EmptyPointSetError, ValueError))

    def test_unsupported_sequence(self):
        """Test that plain lists are rejected."""
        with self.assertRaises(TypeError):
            enclosing_points([[0.0, 0.0]])

    def test_single_point(self):
        """Test that a single point is its own ball."""
        ball = enclosing_points(np.array([[1.5, -2.0, 4.0]]))
        assert_array_equal(ball.center, [1.5, -2.0, 4.0])
        self.assertEqual(ball.radius_squared, 0.0)

    def test_zero_dimensions(self):
        """Test the single point of the 0-dimensional space."""
        ball = enclosing_points(np.zeros((1, 0)))
        self.assertEqual(ball.dimension, 0)
        self.assertEqual(ball.radius_squared, 0.0)

    def test_duplicated_points(self):
        """Test that repeated points collapse to one."""
        ball = enclosing_points(np.array([[2.0, 2.0]] * 5))
        assert_allclose(ball.center, [2.0, 2.0])
        self.assertEqual(ball.radius_squared, 0.0)

    def test_one_dimension(self):
        """Test the segment spanned by two points."""
        ball = enclosing_points(np.array([[10.0], [4.0]]))
        self.assertAlmostEqual(ball.center[0], 7.0, places=12)
        self.assertAlmostEqual(ball.radius_squared, 9.0, places=12)

    def test_triangle_with_obtuse_angle(self):
        """Test that an inner vertex is ignored in favour of the diameter."""
        points = np.array([[-1.0, 0.0], [1.0, 0.0], [0.0, 0.1]])
        ball = enclosing_points(points)
        assert_allclose(ball.center, [0.0, 0.0], rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 1.0, places=12)

    def test_circle_through_three_points(self):
        """Test three points on a circle."""
        points = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]]) * 3.0 + OFFSET_3D[:2]
        ball = enclosing_points(points)
        assert_allclose(ball.center, OFFSET_3D[:2], rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 9.0, places=12)

    def test_tetrahedron(self):
        """Test the circumsphere of a regular tetrahedron."""
        points = np.array([
            [1.0, 1.0, 1.0],
            [1.0, -1.0, -1.0],
            [-1.0, 1.0, -1.0],
            [-1.0, -1.0, 1.0],
        ]) + OFFSET_3D
        ball = enclosing_points(points)
        assert_allclose(ball.center, OFFSET_3D, rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 3.0, places=12)

    def test_collinear_points_in_space(self):
        """Test points on a line, whose circumscribed solves degenerate."""
        points = np.array([
            [-1.0, 0.0, 0.0],
            [-0.5, 0.0, 0.0],
            [0.5, 0.0, 0.0],
            [1.0, 0.0, 0.0],
        ]) * 3.0 + OFFSET_3D
        ball = enclosing_points(points)
        assert_allclose(ball.center, OFFSET_3D, rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 9.0, places=12)

    def test_six_cube(self):
        """Test uniform points in a 6-cube."""
        offset = np.array([-3.0, 7.0, 4.8, 1.2, -0.5, 2.0])
        points = generate_points_in_cube(100, dimension=6, edge=2.0, center=offset, seed=3)
        ball = enclosing_points(points)
        half_diagonal = np.sqrt(6.0)
        self.assertTrue(np.all(np.abs(ball.center - offset) < 1.0))
        self.assertLess(abs(ball.radius - half_diagonal), 1.0)
        result = evaluate_enclosure(points, ball, epsilon=tolerance(ball))
        self.assertTrue(result['all_enclosed'])
        self.assertGreaterEqual(result['boundary_count'], 2)

    def test_linked_deque_of_tuples(self):
        """Test a collections.deque of tuples, reordered in place."""
        items = deque([(0.0, 0.0), (4.0, 0.0), (2.0, 1.0), (2.0, -1.0)])
        identities = {id(item) for item in items}
        ball = enclosing_points(items)
        assert_allclose(ball.center, [2.0, 0.0], rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 4.0, places=12)
        self.assertEqual({id(item) for item in items}, identities)

    def test_verbose_output(self):
        """Test enclosing_points with verbose output."""
        # Redirect stdout to capture verbose output
        captured_output = io.StringIO()
        sys.stdout = captured_output

        enclosing_points(np.array([[0.0, 0.0], [1.0, 1.0]]), verbose=True)

        # Reset stdout
        sys.stdout = sys.__stdout__

        output = captured_output.getvalue()
        self.assertIn("MEB: Points = 2, Dimension = 2", output)
        self.assertIn("MEB: Capacity = 3", output)

# ========================= TEST RANDOM POINT CLOUDS ========================= #

class TestEnclosingRandomSets(unittest.TestCase):
    """Unit tests for enclosing_points() on random point clouds."""

    def setUp(self):
        """Set up random points inside a 3-ball and a 4-cube."""
        self.ball_points = generate_points_in_ball(2_000, dimension=3, radius=3.0,
                                                   center=OFFSET_3D, seed=11)
        self.cube_points = generate_points_in_cube(1_000, dimension=4, edge=2.0, seed=12)

    def assert_minimum_enclosing(self, points, ball):
        """Every point enclosed and the ball pinned by at least two points."""
        result = evaluate_enclosure(points, ball, epsilon=tolerance(ball))
        self.assertTrue(result['all_enclosed'], msg=f"max excess {result['max_excess']}")
        self.assertGreaterEqual(result['boundary_count'], 2)

    def test_points_in_ball(self):
        """Test the enclosing ball of points inside a known ball."""
        points = self.ball_points.copy()
        ball = enclosing_points(points)
        self.assert_minimum_enclosing(points, ball)
        self.assertLessEqual(ball.radius, 3.0 * (1.0 + 1e-12))
        self.assertGreater(ball.radius, 2.9)
        assert_allclose(ball.center, OFFSET_3D, rtol=0, atol=0.1)

    def test_points_in_cube(self):
        """Test the enclosing ball of points inside a 4-cube."""
        points = self.cube_points.copy()
        ball = enclosing_points(points)
        self.assert_minimum_enclosing(points, ball)
        # The corners are at distance 2 from the cube center
        self.assertLessEqual(ball.radius, 2.0 * (1.0 + 1e-12))

    def test_points_are_permuted_in_place(self):
        """Test that the call only reorders the caller's points."""
        points = self.ball_points.copy()
        enclosing_points(points)
        assert_array_equal(sorted_rows(points), sorted_rows(self.ball_points))

    def test_front_point_on_boundary(self):
        """Test that the point moved to the front last lies on the surface."""
        points = self.cube_points.copy()
        ball = enclosing_points(points)
        distance = np.linalg.norm(points[0] - ball.center)
        self.assertAlmostEqual(distance, ball.radius, delta=tolerance(ball))

    def test_permutation_invariance(self):
        """Test that the result does not depend on the input order."""
        reference = enclosing_points(self.ball_points.copy())
        rng = np.random.default_rng(5)
        for _ in range(3):
            points = rng.permutation(self.ball_points)
            ball = enclosing_points(points)
            self.assertAlmostEqual(ball.radius_squared, reference.radius_squared, places=9)
            assert_allclose(ball.center, reference.center, rtol=0, atol=1e-7)

    def test_reuse_of_reordered_points(self):
        """Test that a second call on the reordered points finds the same ball."""
        points = self.cube_points.copy()
        first = enclosing_points(points)
        second = enclosing_points(points)
        self.assertAlmostEqual(first.radius_squared, second.radius_squared, places=9)
        assert_allclose(first.center, second.center, rtol=0, atol=1e-7)

    def test_added_points(self):
        """Test reuse with enclosed points added to the front and outside points to the back."""
        points = self.ball_points.copy()
        ball = enclosing_points(points)
        inside = np.array([ball.center])
        outside = np.array([ball.center + np.array([10.0, 0.0, 0.0])])
        grown = np.vstack((inside, points, outside))
        new_ball = enclosing_points(grown)
        self.assert_minimum_enclosing(grown, new_ball)
        self.assertGreater(new_ball.radius, ball.radius)

    def test_large_point_set(self):
        """Test many points in a ball, far deeper than the interpreter's recursion limit."""
        points = generate_points_in_ball(100_000, dimension=3, radius=3.0,
                                         center=OFFSET_3D, seed=13)
        ball = enclosing_points(points)
        self.assertLessEqual(ball.radius_squared, 9.0 * (1.0 + 1e-12))
        self.assertGreater(ball.radius_squared, 9.0 * (1.0 - 1e-3))
        result = evaluate_enclosure(points, ball, epsilon=tolerance(ball))
        self.assertTrue(result['all_enclosed'])

# ========================= TEST RECURSION GUARD ========================= #

class TestRecursionGuard(unittest.TestCase):
    """Unit tests for the stack-growth guard."""

    def setUp(self):
        """Set up random points in the plane."""
        self.points = generate_points_in_ball(200, dimension=2, radius=1.0, seed=21)

    def test_red_zone_grows_with_dimension(self):
        """Test the reserved headroom."""
        self.assertGreater(red_zone(0), 0)
        self.assertGreater(red_zone(10), red_zone(2))

    def test_heap_continuation_matches_recursion(self):
        """Test that the heap frame stack reproduces the recursion exactly."""
        recursive = self.points.copy()
        iterative = self.points.copy()

        native_ball = enclosing_points(recursive, grow_stack=False)
        # No headroom left: everything runs on the heap frame stack
        with patch(f'{ENCLOSING_MODULE}.RED_ZONE_BASE', sys.getrecursionlimit()):
            heap_ball = enclosing_points(iterative)

        self.assertEqual(native_ball, heap_ball)
        assert_array_equal(recursive, iterative)

    def test_heap_continuation_of_a_subproblem(self):
        """Test that switching to the heap midway gives the same result."""
        recursive = ArrayDeque(self.points)
        switched = ArrayDeque(self.points)

        expected = enclosing_module._descend(recursive, BoundaryStack(2), 0, None)
        result = enclosing_module._descend(switched, BoundaryStack(2), 0, 25)

        self.assertEqual(expected, result)
        assert_array_equal(recursive.to_array(), switched.to_array())

    def test_deep_input_with_guard(self):
        """Test that a deep input completes with the guard enabled."""
        points = generate_points_in_ball(20_000, dimension=2, radius=1.0, seed=22)
        ball = enclosing_points(points, grow_stack=True)
        result = evaluate_enclosure(points, ball, epsilon=tolerance(ball))
        self.assertTrue(result['all_enclosed'])

    def test_deep_input_without_guard(self):
        """Test that disabling the guard exposes the recursion limit."""
        points = generate_points_in_ball(4 * sys.getrecursionlimit(), dimension=2, seed=23)
        with self.assertRaises(RecursionError):
            enclosing_points(points, grow_stack=False)

    def test_with_bounds_single_attempt(self):
        """Test enclosing_points_with_bounds with a prescribed boundary point."""
        points = ArrayDeque([[0.0, 0.0], [1.0, 0.0]])
        bounds = BoundaryStack(2)
        bounds.push(np.array([3.0, 0.0]))
        ball = enclosing_points_with_bounds(points, bounds)
        # Smallest circle with (3, 0) on its surface enclosing both points
        assert_allclose(ball.center, [1.5, 0.0], rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 2.25, places=12)
        self.assertEqual(len(bounds), 1)
        self.assertEqual(len(points), 2)


# ========================= TEST CAPACITY RETRIES ========================= #

class TestCapacityRetries(unittest.TestCase):
    """Unit tests for the boundary capacity retries."""

    def test_all_capacities_fail(self):
        """Test that exhausting every capacity raises NumericalInstabilityError."""
        points = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
        original = points.copy()
        with patch(f'{ENCLOSING_MODULE}.with_bounds', return_value=None):
            with self.assertWarns(RuntimeWarning):
                with self.assertRaises(NumericalInstabilityError):
                    enclosing_points(points)
        # Still the same points, possibly reordered
        assert_array_equal(sorted_rows(points), sorted_rows(original))

    def test_numerical_error_hierarchy(self):
        """Test that NumericalInstabilityError belongs to the toolkit's errors."""
        self.assertTrue(issubclass(NumericalInstabilityError, EnclosingBallError))
        self.assertTrue(issubclass(NumericalInstabilityError, ArithmeticError))

    def test_retry_with_fewer_bounds(self):
        """Test that a failing full boundary is retried with one bound less."""
        def fail_at_full_capacity(bounds, dimension=None, verbose=False):
            if bounds.capacity == bounds.max_capacity:
                return None
            return with_bounds(bounds, dimension, verbose)

        points = np.array([[-1.0, 0.0], [1.0, 0.0], [0.0, 0.1]])
        with patch(f'{ENCLOSING_MODULE}.with_bounds', side_effect=fail_at_full_capacity):
            with self.assertWarns(RuntimeWarning):
                ball = enclosing_points(points)
        assert_allclose(ball.center, [0.0, 0.0], rtol=0, atol=1e-12)
        self.assertAlmostEqual(ball.radius_squared, 1.0, places=12)

    def test_reduced_capacity_ball_must_enclose(self):
        """Test that a reduced boundary yielding a too small ball is not accepted."""
        def fail_with_two_bounds(bounds, dimension=None, verbose=False):
            if len(bounds) == 2:
                return None
            return with_bounds(bounds, dimension, verbose)

        points = np.array([[0.0], [2.0]])
        with patch(f'{ENCLOSING_MODULE}.with_bounds', side_effect=fail_with_two_bounds):
            with self.assertWarns(RuntimeWarning):
                with self.assertRaises(NumericalInstabilityError):
                    enclosing_points(points)

    def test_linked_deque_is_left_in_place(self):
        """Test that a Deque passed in is used directly."""
        points = LinkedDeque([np.array([0.0]), np.array([2.0])])
        ball = enclosing_points(points)
        self.assertAlmostEqual(ball.center[0], 1.0, places=12)
        self.assertEqual(len(points), 2)


# ========================= TEST ERRORS DURING RECURSION ========================= #

class TestErrorsDuringRecursion(unittest.TestCase):
    """Unit tests for the point sequence after an error escaped the algorithm."""

    def setUp(self):
        """Set up a point set with a NaN coordinate."""
        self.points = np.array([[0.0, 0.0], [np.nan, 1.0], [5.0, 0.0]])
        self.original = self.points.copy()

    def test_nan_coordinate_keeps_points(self):
        """Test that no point is lost when a NaN coordinate raises InvalidBallError."""
        with self.assertRaises(InvalidBallError):
            enclosing_points(self.points)
        assert_array_equal(sorted_rows(self.points), sorted_rows(self.original))

    def test_nan_coordinate_keeps_points_on_heap(self):
        """Test the same on the heap frame stack."""
        with patch(f'{ENCLOSING_MODULE}.RED_ZONE_BASE', sys.getrecursionlimit()):
            with self.assertRaises(InvalidBallError):
                enclosing_points(self.points)
        assert_array_equal(sorted_rows(self.points), sorted_rows(self.original))

    def test_recursion_and_heap_leave_same_order(self):
        """Test that both paths restore the sequence to the same order."""
        recursive = self.points.copy()
        iterative = self.points.copy()
        with self.assertRaises(InvalidBallError):
            enclosing_points(recursive, grow_stack=False)
        with patch(f'{ENCLOSING_MODULE}.RED_ZONE_BASE', sys.getrecursionlimit()):
            with self.assertRaises(InvalidBallError):
                enclosing_points(iterative)
        assert_array_equal(recursive, iterative)

    def test_bounds_are_restored(self):
        """Test that prescribed bounds are left unchanged after an error."""
        points = ArrayDeque(self.points)
        bounds = BoundaryStack(2)
        bounds.push(np.array([0.0, 3.0]))
        for grow_stack, red_zone_base in ((False, enclosing_module.RED_ZONE_BASE),
                                          (True, sys.getrecursionlimit())):
            with patch(f'{ENCLOSING_MODULE}.RED_ZONE_BASE', red_zone_base):
                with self.assertRaises(InvalidBallError):
                    enclosing_points_with_bounds(points, bounds, grow_stack=grow_stack)
            self.assertEqual(len(bounds), 1)
            assert_array_equal(bounds.as_array(), [[0.0, 3.0]])
            assert_array_equal(sorted_rows(points.to_array()), sorted_rows(self.original))

    def test_linked_deque_keeps_points(self):
        """Test that a collections.deque keeps every point after an error."""
        points = deque(tuple(row) for row in self.points)
        with self.assertRaises(InvalidBallError):
            enclosing_points(points)
        self.assertEqual(len(points), 3)
        assert_array_equal(sorted_rows(np.array(points)), sorted_rows(self.original))

    def test_unexpected_error_keeps_points(self):
        """Test that an error raised by the solver itself keeps the points."""
        points = generate_points_in_ball(50, dimension=3, radius=1.0, seed=31)
        original = points.copy()
        calls = []

        def fail_eventually(bounds, dimension=None, verbose=False):
            calls.append(len(bounds))
            if len(calls) == 5:
                raise ZeroDivisionError("solver failure")
            return with_bounds(bounds, dimension, verbose)

        with patch(f'{ENCLOSING_MODULE}.with_bounds', side_effect=fail_eventually):
            with self.assertRaises(ZeroDivisionError):
                enclosing_points(points)
        assert_array_equal(sorted_rows(points), sorted_rows(original))
