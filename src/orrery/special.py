"""
Special functions used to solve Kepler's equation.
"""

import math

import numpy as np

NTERMS = 30


def bessel_j(order, x, nterms=NTERMS):
    """
    Bessel function of the first kind of integer order, from its power series.

    J_a(x) = sum_m (-1)^m / (m! (m + a)!) (x / 2)^(2m + a)

    Each term is computed from the previous one, so that no large factorial or
    power is evaluated. The series is truncated after ``nterms`` terms, which
    is enough for the arguments used by the orbit engine (x < 9).

    Parameters
    ----------
    order : int
        Non-negative order of the function.
    x : float or array
        Argument(s).
    nterms : int
        Number of terms of the series.

    Returns
    -------
    float or array
        J_order(x), with the shape of ``x``.

    """
    x2 = np.asarray(x, dtype=float) / 2.0

    term = x2**order / math.factorial(order)
    total = term
    for m in range(1, nterms):
        term = term * (-x2 * x2 / m / (m + order))
        total = total + term

    return total
