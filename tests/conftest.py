import pathlib

import pytest

from orrery.utils import Params

CURRENT_PATH = pathlib.Path(__file__).absolute().parent
EXAMPLE_PATH = CURRENT_PATH / ".." / "example"
EXAMPLE_PARAMS = EXAMPLE_PATH / "scene_comet.yml"


@pytest.fixture()
def params():
    return Params.read(EXAMPLE_PARAMS)


@pytest.fixture()
def params_small(params):
    """With fewer steps."""
    params._params["nsteps"] = 10
    return params


@pytest.fixture()
def params_tmp(tmp_path):
    """With outputs in a temporary directory."""
    p = Params.read(EXAMPLE_PARAMS)
    p.work_dir = str(tmp_path)
    return p
