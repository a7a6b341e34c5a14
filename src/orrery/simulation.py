"""
Stepping of a scene: the clock is advanced, then every body is moved.

Orbiting bodies get their translation from the orbit engine, in the frame of
their orbit where the focus is at the origin. Other bodies (planets) can spin
around their axis and revolve around the Y axis of the scene.
"""

import logging

import numpy as np
from astropy.table import Table
from scipy.spatial.transform import Rotation

from .clock import SimTime
from .orbit import Ellipse, Orbit

logger = logging.getLogger(__name__)

ROTATION_STEP = 0.03  # rad per step
REVOLUTION_STEP = 0.02  # rad per step
Y_AXIS = np.array([0.0, 1.0, 0.0])


class SimState:
    """Toggles controlling what is advanced at each step."""

    flags = ("advance_time", "advance_rotation", "advance_revolution")

    def __init__(
        self, advance_time=False, advance_rotation=False, advance_revolution=False
    ):
        self.advance_time = bool(advance_time)
        self.advance_rotation = bool(advance_rotation)
        self.advance_revolution = bool(advance_revolution)

    def __repr__(self):
        args = ", ".join(f"{name}={getattr(self, name)}" for name in self.flags)
        return f"SimState({args})"

    @classmethod
    def from_dict(cls, flags):
        unknown = set(flags) - set(cls.flags)
        if unknown:
            raise ValueError(f"unknown simulation flags: {sorted(unknown)}")
        return cls(**flags)

    def toggle(self, name):
        if name not in self.flags:
            raise ValueError(f"'{name}' is not a simulation flag")
        setattr(self, name, not getattr(self, name))


class OrbitingBody:
    """A body moving on an orbit.

    ``orientation`` is the rotation of the orbit frame in the scene, the orbit
    itself lies in the z=0 plane of its frame.
    """

    def __init__(self, name, orbit, orientation=None):
        self.name = name
        self.orbit = orbit
        if orientation is None:
            orientation = Rotation.identity()
        self.orientation = orientation
        self.translation = np.zeros(3)

    def __repr__(self):
        return f"OrbitingBody({self.name!r}, {self.orbit!r})"

    def advance(self, clock, state):
        x, y = self.orbit.focal_position(clock)
        self.translation = np.array([x, y, 0.0])

    @property
    def world_position(self):
        return self.orientation.apply(self.translation)

    @property
    def world_rotation(self):
        return self.orientation


class Planet:
    """A body that does not follow an orbit, but can spin and revolve."""

    def __init__(self, name, axis, translation=(0.0, 0.0, 0.0)):
        axis = np.asarray(axis, dtype=float)
        norm = np.linalg.norm(axis)
        if axis.shape != (3,) or norm == 0:
            raise ValueError(f"invalid rotation axis for {name}: {axis}")
        self.name = name
        self.axis = axis / norm
        self.rotation = Rotation.identity()
        self.translation = np.array(translation, dtype=float)

    def __repr__(self):
        return f"Planet({self.name!r}, axis={self.axis.tolist()})"

    def advance(self, clock, state):
        if state.advance_rotation:
            spin = Rotation.from_rotvec(ROTATION_STEP * self.axis)
            self.rotation = spin * self.rotation
        if state.advance_revolution:
            rot = Rotation.from_rotvec(REVOLUTION_STEP * Y_AXIS)
            self.translation = rot.apply(self.translation)

    @property
    def world_position(self):
        return self.translation

    @property
    def world_rotation(self):
        """Spin of the planet around its axis."""
        return self.rotation


def body_from_dict(desc):
    """Create a body from its description in the parameter file."""
    name = desc["name"]
    if "orbit" in desc:
        params = desc["orbit"]
        orbit = Orbit(
            Ellipse(params["a"], params["b"]),
            SimTime.from_whole_units(params["period"]),
            params.get("starting_offset", 0.0),
        )
        orientation = desc.get("orientation")
        if orientation is not None:
            orientation = Rotation.from_euler("zxz", orientation)
        return OrbitingBody(name, orbit, orientation=orientation)
    elif "axis" in desc:
        return Planet(name, desc["axis"], desc.get("translation", (0.0, 0.0, 0.0)))
    else:
        raise ValueError(f"body '{name}' has neither an orbit nor an axis")


def step(clock, bodies, state):
    """
    Run one simulation step.

    The clock is advanced first (if enabled), then all the bodies are moved
    using this same clock value.

    Parameters
    ----------
    clock : SimTime
        The simulation clock, advanced in place.
    bodies : list
        `OrbitingBody` and `Planet` instances.
    state : SimState
        The toggles.

    Returns
    -------
    dict
        Position of each body in the scene, by name.

    """
    if state.advance_time:
        clock.tick()

    for body in bodies:
        body.advance(clock, state)

    return {body.name: body.world_position for body in bodies}


def run(params, nsteps=None, clock=None):
    """Step the scene described by ``params`` and record the positions.

    Each row also holds the orientation of the body as a rotation vector
    (rx, ry, rz): the orbit frame for orbiting bodies, the spin for planets.
    """
    nsteps = params.nsteps if nsteps is None else nsteps
    clock = SimTime() if clock is None else clock
    state = params.sim_state()
    bodies = params.make_bodies()
    logger.info("Simulating %d steps for %d bodies, %r", nsteps, len(bodies), state)

    steps, ticks, names, pos, rot = [], [], [], [], []
    for i in range(nsteps):
        positions = step(clock, bodies, state)
        for body in bodies:
            steps.append(i)
            ticks.append(clock.ticks)
            names.append(body.name)
            pos.append(positions[body.name])
            rot.append(body.world_rotation.as_rotvec())

    pos = np.array(pos, dtype=float).reshape(-1, 3)
    rot = np.array(rot, dtype=float).reshape(-1, 3)
    return Table(
        [steps, ticks, names, *pos.T, *rot.T],
        names=("step", "ticks", "name", "x", "y", "z", "rx", "ry", "rz"),
    )
