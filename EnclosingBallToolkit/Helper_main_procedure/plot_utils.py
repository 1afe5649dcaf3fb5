# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
#
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""
Visualization Toolkit for Enclosing Balls

This module provides plotting capabilities for:
- 2D and 3D point cloud visualization
- Enclosing circle and sphere overlays
"""

# Standard library imports
from typing import Optional

# Third-party imports
import numpy as np
import matplotlib.pyplot as plt

# Local imports
from ..enclosing_submodules.ball import Ball

__all__ = [
    # Core Plotting Utilities
    'plot_commons',

    # Point Visualization
    'plot_points',

    # Ball Visualization
    'plot_ball',
]

SPHERE_RESOLUTION = 24  # Meridians and parallels of the 3D wireframe

# ========================== Core Plotting Utilities ========================== #

def _axes(dimension: int):
    """Returns current axes, creating 3D axes when needed."""
    if dimension not in (2, 3):
        raise ValueError(f"Only 2D and 3D data can be plotted, got dimension {dimension}.")
    if dimension == 3:
        figure = plt.gcf()
        axes = figure.gca() if figure.axes else None
        if axes is None or axes.name != '3d':
            axes = figure.add_subplot(projection='3d')
        return axes
    return plt.gca()

def plot_commons(title: Optional[str] = None, hold: bool = True,
                 legend: bool = False) -> None:
    """
    Common plotting settings for all plots.

    Sets equal aspect, axis labels, grid and optionally title and legend.

    Args:
        title (str, optional): Title of the plot.
        hold (bool, optional): Whether to hold the plot
            (if False, the plot is displayed immediately). Defaults to True.
        legend (bool, optional): Whether to show the legend. Defaults to False.
    """
    axes = plt.gca()

    # Equal aspect ensures circles are not distorted
    if getattr(axes, 'name', None) == '3d':
        axes.set_box_aspect((1, 1, 1))
        axes.set_zlabel("z", fontsize=15)
    else:
        axes.set_aspect("equal", adjustable="datalim")

    axes.set_xlabel("x", fontsize=15)
    axes.set_ylabel("y", fontsize=15)

    if title:
        axes.set_title(title, fontsize=16, fontweight="bold")

    axes.grid(True)

    if legend:
        axes.legend(loc="upper right")

    if not hold:
        plt.show()

# =========================== Point Visualization =========================== #

def plot_points(points: np.ndarray, title: Optional[str] = None,
                color: str = 'gray', label: Optional[str] = None,
                hold: bool = True) -> None:
    """
    Scatter plot of 2D or 3D points.

    Args:
        points (np.ndarray): Array of shape (N, 2) or (N, 3).
        title (Optional[str]): Title of the plot.
        color (str): Color of the points.
        label (Optional[str]): Label for the legend.
        hold (bool): Whether to hold the plot.

    Raises:
        ValueError: If the points are not 2D or 3D.
    """
    points = np.asarray(points, dtype=float)
    if points.ndim != 2:
        raise ValueError("Points must be a 2D NumPy array of shape (N, 2) or (N, 3).")

    axes = _axes(points.shape[1])
    axes.scatter(*points.T, color=color, label=label, s=10, alpha=0.6)

    plot_commons(title=title, hold=hold, legend=label is not None)

# =========================== Ball Visualization ============================ #

def plot_ball(ball: Ball, points: Optional[np.ndarray] = None,
              title: Optional[str] = None, color: str = 'blue',
              linestyle: str = 'solid', label: Optional[str] = None,
              hold: bool = True, linewidth: int = 2) -> None:
    """
    Plots an enclosing circle (2D) or wireframe sphere (3D), with optional points.

    Args:
        ball (Ball): The ball to draw.
        points (Optional[np.ndarray]): Points to draw underneath the ball.
        title (Optional[str]): Title of the plot.
        color (str): Color of the ball.
        linestyle (str): Line style of the circle (2D only).
        label (Optional[str]): Label for the legend.
        hold (bool): Whether to hold the plot.
        linewidth (int): Width of the outline.

    Raises:
        ValueError: If the ball is neither 2D nor 3D.
    """
    axes = _axes(ball.dimension)

    if points is not None:
        plot_points(points, hold=True)

    radius = ball.radius
    if ball.dimension == 2:
        circ = plt.Circle(tuple(ball.center), radius, color=color, linestyle=linestyle,
                          fill=False, linewidth=linewidth, label=label)
        axes.add_artist(circ)
        axes.scatter(*ball.center, color=color, marker='+', s=100)
        # Artists do not update data limits on their own
        axes.update_datalim([ball.center - radius, ball.center + radius])
        axes.autoscale_view()
    else:
        azimuth, polar = np.meshgrid(np.linspace(0, 2 * np.pi, SPHERE_RESOLUTION),
                                     np.linspace(0, np.pi, SPHERE_RESOLUTION))
        x_coords = ball.center[0] + radius * np.cos(azimuth) * np.sin(polar)
        y_coords = ball.center[1] + radius * np.sin(azimuth) * np.sin(polar)
        z_coords = ball.center[2] + radius * np.cos(polar)
        axes.plot_wireframe(x_coords, y_coords, z_coords, color=color,
                            linewidth=linewidth / 4, alpha=0.5, label=label)
        axes.scatter(*ball.center, color=color, marker='+', s=100)

    plot_commons(title=title, hold=hold, legend=label is not None)
