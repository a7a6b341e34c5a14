# Functions to get the position vector (cartesian coordinates) of a body on a
# closed elliptical orbit, at a given simulation time

import kepler
import numpy as np

from ..clock import SimTime, progress, remainder
from ..special import bessel_j

# number of terms of the Bessel series for the eccentric anomaly
NSERIES = 9


class Ellipse:
    """Shape of an orbit, centered at its geometric center (not its focus).

    Parameters
    ----------
    semi_major : float
        Semi-major axis a.
    semi_minor : float
        Semi-minor axis b, with 0 < b <= a.

    """

    def __init__(self, semi_major, semi_minor):
        a = float(semi_major)
        b = float(semi_minor)
        if not (np.isfinite(a) and np.isfinite(b)) or a <= 0 or b <= 0:
            raise ValueError(f"invalid ellipse axes: a={a}, b={b}")
        if b > a:
            raise ValueError(
                f"semi-minor axis larger than semi-major axis: a={a}, b={b}"
            )
        self._a = a
        self._b = b

    def __repr__(self):
        return f"Ellipse(a={self._a}, b={self._b})"

    @property
    def semi_major(self):
        return self._a

    @property
    def semi_minor(self):
        return self._b

    @property
    def focal_distance(self):
        """Distance between the center and a focus, c = sqrt(a**2 - b**2)."""
        return np.sqrt(self._a**2 - self._b**2)

    @property
    def eccentricity(self):
        return self.focal_distance / self._a

    def point(self, angle):
        """Point of the ellipse for a given eccentric anomaly (rad)."""
        return self._a * np.cos(angle), self._b * np.sin(angle)


class Orbit:
    """Closed elliptical orbit of a body.

    The orbit owns no state: the position is a function of the time that is
    given to it.

    Parameters
    ----------
    ellipse : Ellipse
        Shape of the orbit.
    period : SimTime
        Duration of one revolution, must be nonzero.
    starting_offset : float
        Phase (mean anomaly) at time zero, in radians.

    """

    def __init__(self, ellipse, period, starting_offset=0.0):
        if not isinstance(period, SimTime):
            raise TypeError(f"period must be a SimTime, not {type(period)}")
        if period.ticks == 0:
            raise ValueError("orbital period must be nonzero")
        self._ellipse = ellipse
        self._period = period.copy()
        self._starting_offset = float(starting_offset)

    def __repr__(self):
        return (
            f"Orbit({self.ellipse!r}, period={self._period!r}, "
            f"starting_offset={self.starting_offset})"
        )

    @property
    def ellipse(self):
        return self._ellipse

    @property
    def period(self):
        return self._period.copy()

    @property
    def starting_offset(self):
        """Mean anomaly at time zero (rad)."""
        return self._starting_offset

    @property
    def a(self):
        return self.ellipse.semi_major

    @property
    def b(self):
        return self.ellipse.semi_minor

    @property
    def c(self):
        """Focal distance."""
        return self.ellipse.focal_distance

    @property
    def e(self):
        """Eccentricity."""
        return self.ellipse.eccentricity

    def angular_position(self, angle):
        """Position relative to the ellipse center for an eccentric anomaly."""
        return self.ellipse.point(angle)

    def position(self, time):
        return position(self, time)

    def focal_position(self, time):
        """Position relative to the focus, i.e. `position` shifted by -c on x."""
        x, y = position(self, time)
        return x - self.c, y


def mean_anomaly(orbit, time):
    """Mean anomaly (rad) of the orbit at the given time.

    The time is folded into one period, so the result lies in
    [starting_offset, starting_offset + 2pi).
    """
    frac = progress(remainder(time, orbit._period), orbit._period)
    return frac * 2.0 * np.pi + orbit.starting_offset


def eccentric_anomaly(M, e, nterms=NSERIES):
    """
    Solve Kepler's equation M = E - e sin(E) with its Bessel series.

    E = M + 2 sum_n J_n(n e) sin(n M) / n, for n = 1..nterms. The series
    converges for e < 1 but slowly when e gets close to 1.

    @param float M: mean anomaly (rad), scalar or array
    @param float e: eccentricity, 0 <= e < 1
    @param int nterms: number of terms of the series
    @return float: eccentric anomaly (rad), with the shape of M
    """
    M = np.asarray(M, dtype=float)
    correction = np.zeros_like(M)
    for n in range(1, nterms + 1):
        correction += bessel_j(n, n * e) * np.sin(n * M) / n
    return M + 2 * correction


def solve_kepler(M, e):
    """
    Exact eccentric anomaly, computed with the kepler package.

    Used as a reference for `eccentric_anomaly`. The result lies in [0, 2pi).
    """
    M = np.mod(np.asarray(M, dtype=float), 2 * np.pi)
    E = kepler.solve(np.atleast_1d(M), np.full(M.shape or (1,), e, dtype=float))
    return E.reshape(M.shape)


def position(orbit, time):
    """
    Compute the position of a body at the given time.

    @param Orbit orbit: the orbit of the body
    @param SimTime time: time at which the position is computed
    @return float[2]: position (x, y) relative to the center of the ellipse
    (semi-major axis along [1, 0]), not shifted to the focus
    """
    M = mean_anomaly(orbit, time)
    E = eccentric_anomaly(M, orbit.e)
    x, y = orbit.angular_position(E)
    return float(x), float(y)


def positions_at_multiple_times(ticks, orbit):
    """
    Compute the positions of a body for an array of times.

    Parameters
    ----------
    ticks : int array
        Raw tick counts of the times (see `SimTime.ticks`).
    orbit : Orbit
        The orbit of the body.

    Returns
    -------
    x, y : float array
        Positions relative to the center of the ellipse, with the shape of
        ``ticks``.

    """
    ticks = np.asarray(ticks, dtype=np.uint64)
    period = orbit._period.ticks
    frac = (ticks % np.uint64(period)).astype(float) / float(period)
    M = frac * 2.0 * np.pi + orbit.starting_offset
    E = eccentric_anomaly(M, orbit.e)
    return orbit.angular_position(E)


def orbit_path(orbit, npoints=500):
    """Outline of the orbit, in the frame where the focus is at [0, 0]."""
    E = np.linspace(0, 2 * np.pi, npoints)
    x, y = orbit.angular_position(E)
    return x - orbit.c, y
