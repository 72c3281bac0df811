"""Activation utilities for brains."""

from __future__ import annotations

import numpy as np


def activate(x):
    """Return the hyperbolic tangent of ``x``."""

    return np.tanh(x)


def activate_derivative(x):
    """Derivative of :func:`activate` evaluated at the pre-activation ``x``."""

    return 1.0 - np.tanh(x) ** 2
