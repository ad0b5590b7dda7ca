#################################################################################
# The Institute for the Design of Advanced Energy Systems Integrated Platform
# Framework (IDAES IP) was produced under the DOE Institute for the
# Design of Advanced Energy Systems (IDAES).
#
# Copyright (c) 2018-2026 by the software owners: The Regents of the
# University of California, through Lawrence Berkeley National Laboratory,
# National Technology & Engineering Solutions of Sandia, LLC, Carnegie Mellon
# University, West Virginia University Research Corporation, et al.
# All rights reserved.  Please see the files COPYRIGHT.md and LICENSE.md
# for full copyright and license information.
#################################################################################
"""Command line access to the bundled fluid ancillaries and melting lines."""

from __future__ import annotations

import argparse
import sys

from fluid_ancillaries.exceptions import (
    ConfigurationError,
    ConvergenceError,
    SegmentLookupError,
    UnsupportedQueryError,
)
from fluid_ancillaries.fluid_data import available_fluids, load_fluid
from fluid_ancillaries.melting_line import MeltingQuantity

_ERRORS = (ConfigurationError, ConvergenceError, SegmentLookupError, UnsupportedQueryError)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fluid-ancillaries")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List bundled fluids")

    sat = sub.add_parser("saturation", help="Evaluate or invert a saturation ancillary")
    sat.add_argument("fluid", help="Bundled fluid name or fluid file path")
    sat.add_argument("key", help="Ancillary key, e.g. pS, rhoL, rhoV")
    group = sat.add_mutually_exclusive_group(required=True)
    group.add_argument("--T", type=float, dest="temperature", help="Temperature [K]")
    group.add_argument("--value", type=float, help="Ancillary value to invert")

    melt = sub.add_parser("melting", help="Evaluate the melting line")
    melt.add_argument("fluid", help="Bundled fluid name or fluid file path")
    group = melt.add_mutually_exclusive_group(required=True)
    group.add_argument("--T", type=float, dest="temperature", help="Temperature [K]")
    group.add_argument("--p", type=float, dest="pressure", help="Pressure [Pa]")
    return parser


def _run(args) -> str:
    if args.command == "list":
        return "\n".join(available_fluids())

    fluid = load_fluid(args.fluid)
    if args.command == "saturation":
        anc = fluid.ancillary(args.key)
        if args.temperature is not None:
            return f"{anc.evaluate(args.temperature):.10g}"
        return f"{anc.invert(args.value):.10g}"

    if fluid.melting_line is None:
        raise ConfigurationError(f"Fluid {fluid.name} has no melting line")
    if args.temperature is not None:
        result = fluid.melting_line.evaluate(
            MeltingQuantity.T, MeltingQuantity.P, args.temperature
        )
    else:
        result = fluid.melting_line.evaluate(
            MeltingQuantity.P, MeltingQuantity.T, args.pressure
        )
    return f"{result:.10g}"


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        print(_run(args))
    except _ERRORS as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
