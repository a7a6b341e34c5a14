import os
import shutil

import yaml
from astropy.io import ascii

from .simulation import SimState, body_from_dict

__doctest_skip__ = ["Params"]

POSITIONS_FILE = "positions.txt"


def create_output_dir(path, remove_if_exist=False):
    if remove_if_exist and os.path.exists(path):
        shutil.rmtree(path)
    os.makedirs(path, exist_ok=True)


def write_positions(tbl, params):
    """Write the table of positions in the output directory."""
    filename = os.path.join(params.get_path("output_dir"), POSITIONS_FILE)
    ascii.write(tbl, filename, overwrite=True)
    return filename


def read_positions(params):
    filename = os.path.join(params.get_path("output_dir"), POSITIONS_FILE)
    return ascii.read(filename)


class Params:
    """Handle parameters.

    Parameters are read from the YAML file and can be accessed as attributes or
    with a dict interface::

        >>> params = Params.read("example/scene_comet.yml")
        >>> params.nsteps
        ... 1280
        >>> params["nsteps"]
        ... 1280

    """

    def __init__(self, params):
        self._params = params

    def __getitem__(self, attr):
        if attr in self._params:
            return self._params[attr]
        else:
            raise KeyError(f"parameter {attr} is not defined")

    def __getattr__(self, attr):
        if attr in self._params:
            return self._params[attr]
        else:
            raise AttributeError(f"parameter {attr} is not defined")

    def __getstate__(self):
        return self.__dict__.copy()

    def __setstate__(self, state):
        self.__dict__.update(state)

    @classmethod
    def read(cls, filename):
        with open(filename) as f:
            params = yaml.safe_load(f)
        return cls(params)

    def get_path(self, key, remove_if_exist=False):
        path = os.path.join(os.path.expanduser(self.work_dir), self._params[key])
        create_output_dir(path, remove_if_exist=remove_if_exist)
        return path

    def sim_state(self):
        """Return the simulation toggles (all disabled if not defined)."""
        return SimState.from_dict(self._params.get("sim") or {})

    def make_bodies(self):
        """Create the bodies described in the ``bodies`` list.

        Names are used as keys of the positions, so they must be unique.
        """
        bodies = [body_from_dict(desc) for desc in self.bodies]
        names = [body.name for body in bodies]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate body names: {duplicates}")
        return bodies
