from .clock import SimTime, progress, remainder  # noqa
from .orbit import Ellipse, Orbit, position  # noqa
from .special import bessel_j  # noqa
from .version import version as __version__  # noqa
