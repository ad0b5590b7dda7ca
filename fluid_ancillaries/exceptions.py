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
Exceptions raised while evaluating or inverting phase-boundary correlations.

ConfigurationError is the idaes exception and is re-exported here so callers
can catch every phase-boundary failure from one module.
"""
from idaes.core.util.exceptions import ConfigurationError, PropertyNotSupportedError

__all__ = [
    "ConfigurationError",
    "SegmentLookupError",
    "ConvergenceError",
    "UnsupportedQueryError",
]


class SegmentLookupError(LookupError):
    """
    No segment of a piecewise melting line covers the requested temperature
    or pressure.
    """

    def __init__(self, msg, value=None):
        super().__init__(msg)
        self.value = value


class ConvergenceError(ArithmeticError):
    """
    A root solve did not converge within its iteration budget or could not
    bracket a root.
    """


class UnsupportedQueryError(PropertyNotSupportedError):
    """
    The requested query direction has no solution path for this curve.
    """
