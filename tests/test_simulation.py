import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from orrery.clock import SimTime
from orrery.orbit import Ellipse, Orbit
from orrery.simulation import (
    REVOLUTION_STEP,
    ROTATION_STEP,
    OrbitingBody,
    Planet,
    SimState,
    body_from_dict,
    run,
    step,
)


def make_comet(name="Comet", offset=-1.0, orientation=None):
    orbit = Orbit(Ellipse(10000.0, 7500.0), SimTime.from_whole_units(20), offset)
    return OrbitingBody(name, orbit, orientation=orientation)


def test_sim_state():
    state = SimState()
    assert not state.advance_time
    assert not state.advance_rotation
    assert not state.advance_revolution
    state.toggle("advance_time")
    assert state.advance_time
    state.toggle("advance_time")
    assert not state.advance_time
    with pytest.raises(ValueError):
        state.toggle("advance_everything")

    state = SimState.from_dict({"advance_rotation": True})
    assert state.advance_rotation and not state.advance_time
    with pytest.raises(ValueError):
        SimState.from_dict({"rotation": True})


def test_step_without_time():
    clock = SimTime()
    comet = make_comet()
    positions = step(clock, [comet], SimState())
    assert clock.ticks == 0

    x, y = comet.orbit.focal_position(SimTime())
    assert_allclose(positions["Comet"], [x, y, 0.0])
    assert comet.translation[2] == 0

    # nothing moves while time is stopped
    positions2 = step(clock, [comet], SimState())
    assert_allclose(positions2["Comet"], positions["Comet"])


def test_step_advances_clock_before_positions():
    clock = SimTime()
    bodies = [make_comet("A", 0.0), make_comet("B", 2.0)]
    state = SimState(advance_time=True)
    for i in range(1, 4):
        positions = step(clock, bodies, state)
        assert clock.ticks == i
        for body in bodies:
            x, y = body.orbit.focal_position(SimTime.from_ticks(i))
            assert_allclose(positions[body.name], [x, y, 0.0])


def test_focus_at_origin():
    # the periapsis of an orbit starting at phase 0 is at distance a - c from
    # the focus
    comet = make_comet(offset=0.0)
    step(SimTime(), [comet], SimState())
    orbit = comet.orbit
    assert_allclose(comet.translation, [orbit.a - orbit.c, 0.0, 0.0], atol=1e-9)


def test_world_position():
    orientation = Rotation.from_euler("zxz", [0.3, 1.1, 0.0])
    comet = make_comet(orientation=orientation)
    positions = step(SimTime.from_ticks(100), [comet], SimState())
    assert_allclose(
        np.linalg.norm(positions["Comet"]), np.linalg.norm(comet.translation)
    )
    assert_allclose(positions["Comet"], orientation.apply(comet.translation))


def test_planet():
    planet = Planet("Planet", [0.4, 0.9, 0.0], [0.0, 0.0, 10000.0])
    assert_allclose(np.linalg.norm(planet.axis), 1.0)

    step(SimTime(), [planet], SimState())
    assert_allclose(planet.rotation.magnitude(), 0.0)
    assert_allclose(planet.translation, [0.0, 0.0, 10000.0])

    state = SimState(advance_rotation=True, advance_revolution=True)
    for _ in range(2):
        positions = step(SimTime(), [planet], state)
    assert_allclose(planet.rotation.magnitude(), 2 * ROTATION_STEP)
    assert_allclose(planet.rotation.as_rotvec(), 2 * ROTATION_STEP * planet.axis)
    angle = 2 * REVOLUTION_STEP
    expected = [10000.0 * np.sin(angle), 0.0, 10000.0 * np.cos(angle)]
    assert_allclose(positions["Planet"], expected, atol=1e-9)

    with pytest.raises(ValueError):
        Planet("Bad", [0.0, 0.0, 0.0])


def test_body_from_dict():
    comet = body_from_dict(
        {
            "name": "Comet",
            "orbit": {"a": 3.0, "b": 2.0, "period": 4, "starting_offset": 0.5},
            "orientation": [0.1, 0.2, 0.3],
        }
    )
    assert isinstance(comet, OrbitingBody)
    assert comet.orbit.period == SimTime.from_whole_units(4)
    assert comet.orbit.starting_offset == 0.5
    assert_allclose(comet.orientation.as_euler("zxz"), [0.1, 0.2, 0.3])

    planet = body_from_dict({"name": "Planet", "axis": [0, 1, 0]})
    assert isinstance(planet, Planet)
    assert_allclose(planet.translation, [0, 0, 0])

    with pytest.raises(ValueError):
        body_from_dict({"name": "Nothing"})
    with pytest.raises(ValueError):
        body_from_dict({"name": "Comet", "orbit": {"a": 1.0, "b": 4 / 3, "period": 20}})
    with pytest.raises(ValueError):
        body_from_dict({"name": "Comet", "orbit": {"a": 3.0, "b": 2.0, "period": 0}})


def test_run(params_small):
    tbl = run(params_small)
    assert tbl.colnames == ["step", "ticks", "name", "x", "y", "z", "rx", "ry", "rz"]
    assert len(tbl) == 20

    comet = tbl[tbl["name"] == "Comet"]
    assert list(comet["ticks"]) == list(range(1, 11))

    orbit = params_small.make_bodies()[0].orbit
    for row in comet:
        x, y = orbit.focal_position(SimTime.from_ticks(row["ticks"]))
        assert_allclose(np.linalg.norm([row["x"], row["y"], row["z"]]), np.hypot(x, y))

    # revolution is disabled in the example scene
    planet = tbl[tbl["name"] == "Planet"]
    assert_allclose(planet["z"], 10000.0)

    # rotation is enabled: the spin grows by one step each time
    axis = params_small.make_bodies()[1].axis
    spin = np.stack([planet["rx"], planet["ry"], planet["rz"]], axis=1)
    expected = ROTATION_STEP * np.arange(1, 11)[:, None] * axis
    assert_allclose(spin, expected, atol=1e-12)

    # the orbit frame of the comet does not change
    rotvec = Rotation.from_euler("zxz", [0.3, 1.1, 0.0]).as_rotvec()
    assert_allclose(comet["rx"], rotvec[0])
    assert_allclose(comet["rz"], rotvec[2])


def test_run_no_steps(params):
    tbl = run(params, nsteps=0)
    assert len(tbl) == 0
