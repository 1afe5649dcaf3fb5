# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Error taxonomy for enclosing ball computations.

Degenerate geometry is not an error: the circumscribed-ball solver reports it
by returning None. The classes below cover the conditions that must reach the
caller.
"""

__all__ = [
    'EnclosingBallError',
    'EmptyPointSetError',
    'NumericalInstabilityError',
    'InvalidBallError',
]


class EnclosingBallError(Exception):
    """Base class of all errors raised by the toolkit."""


class EmptyPointSetError(EnclosingBallError, ValueError):
    """Raised when a minimum enclosing ball is requested for no points."""


class NumericalInstabilityError(EnclosingBallError, ArithmeticError):
    """
    Raised when every boundary capacity failed to produce a ball.

    Round-off made the circumscribed-ball solve fail at every attempt, so no
    ball (approximate or otherwise) is returned.
    """


class InvalidBallError(EnclosingBallError, AssertionError):
    """
    Raised when a ball with a non-finite radius is compared or queried,
    or when a point lies at a non-finite distance from its center.

    Usually means NaN or infinite coordinates were fed upstream.
    """
