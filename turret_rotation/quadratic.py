"""Closed-form real roots of a*x^2 + b*x + c = 0."""

from __future__ import annotations

import math
from typing import Optional

from .vectors import SMALL_NUMBER


def solve_quadratic(a: float, b: float, c: float) -> Optional[tuple[float, float]]:
    """
    Solve a*x^2 + b*x + c = 0 with the quadratic formula.

    Args:
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant term

    Returns:
        ``((-b - sqrt(disc)) / 2a, (-b + sqrt(disc)) / 2a)``, or None when
        ``2a`` is nearly zero (linear or indeterminate equation) or the
        discriminant is negative. The roots are not sorted: for negative
        ``a`` the first root is the larger one.
    """
    denominator = 2.0 * a
    if abs(denominator) <= SMALL_NUMBER:
        return None

    discriminant = b**2 - 4.0 * a * c
    if discriminant < 0.0:
        return None

    radical = math.sqrt(discriminant)
    return ((-b - radical) / denominator, (-b + radical) / denominator)
