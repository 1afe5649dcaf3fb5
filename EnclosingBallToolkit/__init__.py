# Copyright (C) 2025 a.fiorentino4@studenti.unipi.it
# For license terms see LICENSE file.
#
# SPDX-License-Identifier: GPL-2.0-or-later
#
# This program is free software under GPLv2+
# See https://www.gnu.org/licenses/gpl-2.0.html

"""Minimum enclosing ball and circumscribed ball of points in D dimensions."""

from .enclosingball import *  # noqa: F401,F403
from .enclosingball import __all__  # noqa: F401

__version__ = "0.1.0"
