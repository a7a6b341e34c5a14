import argparse
import logging
import os
import sys
import time

from .orbit.plot import plot_results
from .simulation import run
from .utils import Params, write_positions
from .version import version


def main(argv=None):
    parser = argparse.ArgumentParser(description="Orrery")
    parser.add_argument("--debug", action="store_true", help="debug flag")
    parser.add_argument("--verbose", action="store_true", help="verbose flag")
    parser.add_argument("--version", action="version", version=f"%(prog)s {version}")
    subparsers = parser.add_subparsers(title="subcommands", help="")

    # ---------------------------------------------------------------
    # run parser
    sub_run = subparsers.add_parser(
        "run", help="step the scene and store the positions of the bodies"
    )
    sub_run.add_argument("parameter_file", help="Parameter file (yml)")
    sub_run.add_argument(
        "--nsteps", type=int, help="number of steps (params.nsteps by default)"
    )
    sub_run.set_defaults(func=simulate)

    # ---------------------------------------------------------------
    # plot parser
    sub_plot = subparsers.add_parser(
        "plot", help="plot the orbits and the positions computed by run"
    )
    sub_plot.add_argument("parameter_file", help="Parameter file (yml)")
    sub_plot.add_argument(
        "--savefig", help="output file (orbits.png in the output dir by default)"
    )
    sub_plot.set_defaults(func=plot)

    # ---------------------------------------------------------------
    # parse arguments
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.debug:

        def run_pdb(type, value, tb):
            import pdb
            import traceback

            traceback.print_exception(type, value, tb)
            pdb.pm()

        sys.excepthook = run_pdb

    if "func" in args:
        t0 = time.time()
        args.func(args)
        print(f"Done: took {time.time() - t0:.2f} sec.")
    else:
        parser.print_usage()


def simulate(args):
    params = Params.read(args.parameter_file)
    tbl = run(params, nsteps=args.nsteps)
    filename = write_positions(tbl, params)
    print(f"Positions saved to {filename}")


def plot(args):
    params = Params.read(args.parameter_file)
    savefig = args.savefig or os.path.join(params.get_path("output_dir"), "orbits.png")
    plot_results(params, savefig=savefig)
    print(f"Plot saved to {savefig}")
