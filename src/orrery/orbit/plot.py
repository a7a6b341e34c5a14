"""
Functions used to represent the orbits of the bodies
"""

import os

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np

from . import orbit


def plot_orbit(orb, ax=None, color="blue", label=None, npoints=500):
    """
    Plot an orbit in its own frame, with the focus at [0, 0].

    Parameters
    ----------
    orb : Orbit
        The orbit to plot.
    ax : matplotlib axes, optional
        Where to plot, a new figure is created if not given.
    color : str
        Color of the orbit.
    label : str, optional
        Label used in the legend.

    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    x, y = orbit.orbit_path(orb, npoints=npoints)
    ax.plot(x, y, color=color, lw=1, label=label)
    ax.plot([0], [0], "+", color="red")
    ax.set_aspect("equal")
    return ax


def plot_track(x, y, ticks, ax=None, cmap="viridis"):
    """Scatter plot of the positions of a body, colored by time."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    ticks = np.asarray(ticks, dtype=float)
    vmin = ticks.min()
    norm = mpl.colors.Normalize(vmin=vmin, vmax=max(ticks.max(), vmin + 1))
    ax.scatter(x, y, c=ticks, cmap=cmap, norm=norm, marker="+", s=10)
    return ax


def plot_results(params, savefig=None):
    """
    Plot the orbits of a scene and the positions computed by the ``run``
    command (positions.txt in the output directory).
    """
    from ..simulation import OrbitingBody
    from ..utils import Params, read_positions

    if isinstance(params, str):
        path = os.path.dirname(params)
        params = Params.read(params)
        params.work_dir = path

    res = read_positions(params)
    bodies = [b for b in params.make_bodies() if isinstance(b, OrbitingBody)]

    ncols = max(1, len(bodies))
    fig, axes = plt.subplots(
        1, ncols, figsize=(ncols * 5, 5), layout="constrained", squeeze=False
    )

    for ax, body in zip(axes[0], bodies):
        plot_orbit(body.orbit, ax=ax, label=body.name)
        sel = res[res["name"] == body.name]
        if len(sel) > 0:
            # positions are stored in the scene frame, go back to the orbit frame
            xyz = np.stack([np.asarray(sel[k], dtype=float) for k in "xyz"], axis=1)
            local = body.orientation.inv().apply(xyz)
            plot_track(local[:, 0], local[:, 1], sel["ticks"], ax=ax)
        ax.set(title=body.name, xlabel="x", ylabel="y")

    if not bodies:
        axes[0, 0].axis("off")

    if savefig:
        fig.savefig(savefig)
    return fig
