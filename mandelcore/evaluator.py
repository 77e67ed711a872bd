"""Escape-time classification of a single point under z -> z*z + c."""

import math

ESCAPE_RADIUS = 2.0


def in_main_cardioid(a: float, b: float) -> bool:
    p = math.sqrt((a - 0.25) * (a - 0.25) + b * b)
    return a <= p - 2.0 * p * p + 0.25


def in_period2_bulb(a: float, b: float) -> bool:
    return (a + 1.0) * (a + 1.0) + b * b <= 1.0 / 16.0


def evaluate(c: complex, max_iterations: int, *, shortcuts: bool = True) -> int:
    """
    Return the 0-based iteration at which the orbit of ``c`` leaves the
    escape radius, or ``max_iterations`` if the point is presumed to be in
    the set.

    A point is presumed in the set when it lies in the main cardioid or the
    period-2 bulb, when an iterate exactly repeats one of the two preceding
    iterates, or when no escape happens within ``max_iterations`` steps.
    The repeat check only catches period-1 and period-2 cycles landing on
    identical doubles; longer cycles run to the iteration bound.
    """
    c = complex(c)
    if shortcuts and (in_main_cardioid(c.real, c.imag) or in_period2_bulb(c.real, c.imag)):
        return max_iterations

    last0 = 0j
    last1 = 0j
    z = 0j
    for i in range(max_iterations):
        z = z * z + c

        if z == last0 or z == last1:
            return max_iterations

        if abs(z) > ESCAPE_RADIUS:
            return i

        last1 = last0
        last0 = z

    return max_iterations
