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
"""
Scalar root solvers used to invert phase-boundary correlations.

Two methods are wrapped from scipy.optimize:

* solve_bracketed - Brent's method on a closed interval. Failure to bracket
  or to converge is returned as a BracketFailure value instead of raised, so
  callers can decide whether an open method should be tried next.
* solve_open - the secant method started from one point and a step. It is
  only used as a fallback and raises ConvergenceError on failure.

Tolerances and the iteration cap come from SOLVER_CONFIG and can be
overridden per call with keyword arguments.
"""
from collections import namedtuple

import numpy as np
from scipy.optimize import brentq, newton

from pyomo.common.config import ConfigDict, ConfigValue, PositiveFloat, PositiveInt

import idaes.logger as idaeslog

from fluid_ancillaries.exceptions import ConvergenceError

_log = idaeslog.getLogger(__name__)


SOLVER_CONFIG = ConfigDict()
SOLVER_CONFIG.declare(
    "xtol",
    ConfigValue(
        default=1e-12,
        domain=PositiveFloat,
        description="Absolute tolerance on the root",
    ),
)
SOLVER_CONFIG.declare(
    "rtol",
    ConfigValue(
        # Smallest relative tolerance brentq accepts
        default=4 * np.finfo(float).eps,
        domain=PositiveFloat,
        description="Relative tolerance on the root (bracketed solver only)",
    ),
)
SOLVER_CONFIG.declare(
    "maxiter",
    ConfigValue(
        default=100,
        domain=PositiveInt,
        description="Iteration cap for either solver",
    ),
)
SOLVER_CONFIG.declare(
    "secant_step",
    ConfigValue(
        default=-0.01,
        domain=float,
        description="Initial step of the open solver",
    ),
)


BracketFailure = namedtuple("BracketFailure", ["lower", "upper", "reason"])
BracketFailure.__doc__ = "Result of a bracketed solve that did not find a root."


class Residual:
    """
    Difference between a scalar function and a target value.

    Holds only the function and the target, so one instance can be shared
    between the bracketed attempt and the open fallback.
    """

    __slots__ = ("func", "target")

    def __init__(self, func, target):
        self.func = func
        self.target = target

    def __call__(self, x):
        return self.func(x) - self.target

    def __repr__(self):
        return f"Residual({self.func!r}, target={self.target!r})"


def solve_bracketed(residual, lower, upper, **kwargs):
    """
    Find a root of residual in [lower, upper] with Brent's method.

    Returns:
        the root as a float, or a BracketFailure when the end residuals are
        not finite, do not change sign, or the iteration cap is reached.
    """
    config = SOLVER_CONFIG(kwargs)

    f_lower = residual(lower)
    f_upper = residual(upper)
    if not (np.isfinite(f_lower) and np.isfinite(f_upper)):
        return BracketFailure(lower, upper, "non-finite residual at bracket ends")
    if f_lower == 0:
        return float(lower)
    if f_upper == 0:
        return float(upper)
    if np.sign(f_lower) == np.sign(f_upper):
        return BracketFailure(
            lower,
            upper,
            f"no sign change: r({lower})={f_lower}, r({upper})={f_upper}",
        )

    root, info = brentq(
        residual,
        lower,
        upper,
        xtol=config.xtol,
        rtol=config.rtol,
        maxiter=config.maxiter,
        full_output=True,
        disp=False,
    )
    if not info.converged:
        return BracketFailure(
            lower, upper, f"{info.flag} after {info.iterations} iterations"
        )
    return float(root)


def solve_open(residual, start, step=None, **kwargs):
    """
    Find a root of residual with the secant method from start and start + step.

    Raises:
        ConvergenceError if the iteration does not converge to a finite root.
    """
    config = SOLVER_CONFIG(kwargs)
    if step is None:
        step = config.secant_step

    root, info = newton(
        residual,
        start,
        x1=start + step,
        tol=config.xtol,
        maxiter=config.maxiter,
        full_output=True,
        disp=False,
    )
    if not info.converged or not np.isfinite(root):
        raise ConvergenceError(
            f"Secant solve from {start} did not converge: {info.flag} "
            f"after {info.iterations} iterations"
        )
    return float(root)
