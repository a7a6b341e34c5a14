"""
This module contains functions to compute the position of a body on a closed
elliptical orbit, from a fixed-point simulation time, by solving Kepler's
equation with a Bessel series.
"""

from .orbit import *  # noqa
