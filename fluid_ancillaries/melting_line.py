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
Piecewise melting-line correlations p_melt(T) and their inverses.

A melting line is a list of segments of one functional form, listed in
increasing temperature order:

* Simon:                    p = p_0 + a*((T/T_0)**c - 1)
* polynomial in Tr:         p = p_0*(1 + sum(a_i*((T/T_0)**t_i - 1)))
* polynomial in Theta:      p = p_0*(1 + sum(a_i*(T/T_0 - 1)**t_i))

Segment ranges are closed intervals and the first segment in list order that
contains a query value is used, so a temperature shared by two neighbouring
segments is always evaluated by the earlier one.
"""
import enum

import numpy as np

from pyomo.common.config import ConfigDict, ConfigValue, In, ListOf

import idaes.logger as idaeslog

from fluid_ancillaries.exceptions import (
    ConfigurationError,
    ConvergenceError,
    SegmentLookupError,
    UnsupportedQueryError,
)
from fluid_ancillaries.solvers import BracketFailure, Residual, solve_bracketed

_log = idaeslog.getLogger(__name__)


class MeltingLineType(enum.Enum):
    SIMON = "Simon"
    POLYNOMIAL_IN_TR = "polynomial_in_Tr"
    POLYNOMIAL_IN_THETA = "polynomial_in_Theta"


class MeltingQuantity(enum.Enum):
    T = "T"
    P = "P"


def in_closed_range(x1, x2, x):
    """True if x lies between x1 and x2 inclusive, in either order."""
    return min(x1, x2) <= x <= max(x1, x2)


def _segment_config(coefficient_keys):
    config = ConfigDict()
    for key in ("T_0", "p_0", "T_min", "T_max"):
        config.declare(key, ConfigValue(domain=float))
    for key, domain in coefficient_keys:
        config.declare(key, ConfigValue(domain=domain))
    return config


SIMON_SEGMENT_CONFIG = _segment_config((("a", float), ("c", float)))
POLYNOMIAL_SEGMENT_CONFIG = _segment_config((("a", ListOf(float)), ("t", ListOf(float))))

MELTING_LINE_CONFIG = ConfigDict()
MELTING_LINE_CONFIG.declare(
    "type",
    ConfigValue(
        domain=In([m.value for m in MeltingLineType]),
        description="Functional form of every segment",
    ),
)
MELTING_LINE_CONFIG.declare(
    "parts",
    ConfigValue(
        default=[],
        domain=list,
        description="Segments in increasing temperature order",
    ),
)


class SimonSegment:
    def __init__(self, T_0, p_0, a, c, T_min, T_max):
        self.T_0 = T_0
        self.p_0 = p_0
        self.a = a
        self.c = c
        self.T_min = T_min
        self.T_max = T_max
        # Filled in by MeltingLine.set_limits
        self.p_min = None
        self.p_max = None

    def evaluate(self, T):
        return self.p_0 + self.a * ((T / self.T_0) ** self.c - 1)

    def invert(self, p):
        """Algebraic inverse; None where the closed form has no real root."""
        base = (p - self.p_0) / self.a + 1
        if base < 0 or (base == 0 and self.c < 0):
            return None
        return self.T_0 * base ** (1 / self.c)


class PolynomialInTrSegment:
    def __init__(self, T_0, p_0, a, t, T_min, T_max):
        if len(a) != len(t):
            raise ConfigurationError(
                f"Melting line segment coefficient and exponent lengths differ "
                f"({len(a)} != {len(t)})"
            )
        self.T_0 = T_0
        self.p_0 = p_0
        self.a = np.asarray(a, dtype=float)
        self.t = np.asarray(t, dtype=float)
        self.T_min = T_min
        self.T_max = T_max
        self.p_min = None
        self.p_max = None

    def evaluate(self, T):
        return float(self.p_0 * (1 + np.sum(self.a * (np.power(T / self.T_0, self.t) - 1))))


class PolynomialInThetaSegment:
    def __init__(self, T_0, p_0, a, t, T_min, T_max):
        if len(a) != len(t):
            raise ConfigurationError(
                f"Melting line segment coefficient and exponent lengths differ "
                f"({len(a)} != {len(t)})"
            )
        self.T_0 = T_0
        self.p_0 = p_0
        self.a = np.asarray(a, dtype=float)
        self.t = np.asarray(t, dtype=float)
        self.T_min = T_min
        self.T_max = T_max

    def evaluate(self, T):
        with np.errstate(invalid="ignore"):
            terms = self.a * np.power(T / self.T_0 - 1, self.t)
        return float(self.p_0 * (1 + np.sum(terms)))


_SEGMENT_CLASSES = {
    MeltingLineType.SIMON: (SimonSegment, SIMON_SEGMENT_CONFIG),
    MeltingLineType.POLYNOMIAL_IN_TR: (PolynomialInTrSegment, POLYNOMIAL_SEGMENT_CONFIG),
    MeltingLineType.POLYNOMIAL_IN_THETA: (PolynomialInThetaSegment, POLYNOMIAL_SEGMENT_CONFIG),
}


class MeltingLine:
    """
    Piecewise melting curve of a single functional form.

    set_limits() must be called once before the curve is inverted by
    pressure; from_config() does this.
    """

    def __init__(self, type=None, segments=()):
        self.type = None if type is None else MeltingLineType(type)
        self.segments = list(segments)
        if self.type is not None:
            segment_class = _SEGMENT_CLASSES[self.type][0]
            for seg in self.segments:
                if not isinstance(seg, segment_class):
                    raise ConfigurationError(
                        f"{self.type.value} melting line cannot hold "
                        f"{seg.__class__.__name__}"
                    )
        self.Tmin = None
        self.Tmax = None
        self.pmin = None
        self.pmax = None

    @classmethod
    def from_config(cls, data):
        """Build a melting line from a fluid-file entry and set its limits."""
        try:
            config = MELTING_LINE_CONFIG(
                {k: v for k, v in data.items() if k in MELTING_LINE_CONFIG}
            )
        except ValueError as err:
            raise ConfigurationError(f"Invalid melting line entry: {err}") from err
        if config.type is None:
            raise ConfigurationError("Melting line entry has no type")
        mtype = MeltingLineType(config.type)
        segment_class, segment_config = _SEGMENT_CLASSES[mtype]

        segments = []
        for i, part in enumerate(config.parts):
            try:
                seg = segment_config(
                    {k: v for k, v in part.items() if k in segment_config}
                )
            except ValueError as err:
                raise ConfigurationError(
                    f"Invalid {mtype.value} melting line part {i}: {err}"
                ) from err
            missing = [k for k in seg if seg[k] is None]
            if missing:
                raise ConfigurationError(
                    f"{mtype.value} melting line part {i} missing keys: {missing}"
                )
            segments.append(segment_class(**seg.value()))

        line = cls(mtype, segments)
        line.set_limits()
        return line

    def set_limits(self):
        """Back-fill segment pressure limits and compute the curve limits."""
        if self.type is None:
            raise ConfigurationError("Melting line curve not set")
        if not self.segments:
            raise ConfigurationError(f"{self.type.value} melting line has no segments")

        first, last = self.segments[0], self.segments[-1]
        if self.type in (MeltingLineType.SIMON, MeltingLineType.POLYNOMIAL_IN_TR):
            for seg in self.segments:
                seg.p_min = seg.evaluate(seg.T_min)
                seg.p_max = seg.evaluate(seg.T_max)
            self.Tmin, self.pmin = first.T_min, first.p_min
            self.Tmax, self.pmax = last.T_max, last.p_max
        elif self.type is MeltingLineType.POLYNOMIAL_IN_THETA:
            self.Tmin, self.pmin = first.T_0, first.p_0
            self.Tmax = last.T_max
            # No pressure inverse for this form, so pmax stays unset
            self.pmax = None

        _log.debug(
            "%s melting line limits: T [%s, %s], p [%s, %s]",
            self.type.value,
            self.Tmin,
            self.Tmax,
            self.pmin,
            self.pmax,
        )

    def evaluate(self, given, target, value):
        """
        Evaluate the melting line.

        Args:
            given: quantity of value, MeltingQuantity.T or MeltingQuantity.P
            target: quantity to return, the other of the two
            value: temperature or pressure

        Returns:
            pressure for (T, P), temperature for (P, T)
        """
        if self.type is None:
            raise ConfigurationError("Melting line curve not set")
        try:
            given = MeltingQuantity(given)
            target = MeltingQuantity(target)
        except ValueError as err:
            raise UnsupportedQueryError(f"Invalid melting line query: {err}") from err

        if given is MeltingQuantity.T and target is MeltingQuantity.P:
            return self.pressure(value)
        if given is MeltingQuantity.P and target is MeltingQuantity.T:
            return self.temperature(value)
        raise UnsupportedQueryError(
            f"Invalid melting line query: {target.value} given {given.value}"
        )

    def pressure(self, T):
        """Melting pressure at temperature T."""
        if self.type is None:
            raise ConfigurationError("Melting line curve not set")
        for i, seg in enumerate(self.segments):
            if in_closed_range(seg.T_min, seg.T_max, T):
                _log.debug("Melting line p(T=%s) from segment %s", T, i)
                return float(seg.evaluate(T))
        raise SegmentLookupError(
            f"Unable to calculate {self.type.value} melting line p(T) at T={T}", T
        )

    def temperature(self, p):
        """Melting temperature at pressure p."""
        if self.type is None:
            raise ConfigurationError("Melting line curve not set")

        if self.type is MeltingLineType.SIMON:
            for seg in self.segments:
                T = seg.invert(p)
                # Closed-form inverse only trusted from T_0 upwards
                if T is not None and seg.T_0 <= T <= seg.T_max:
                    return float(T)
            raise SegmentLookupError(
                f"Unable to calculate Simon melting line T(p) at p={p}", p
            )

        if self.type is MeltingLineType.POLYNOMIAL_IN_TR:
            for i, seg in enumerate(self.segments):
                if seg.p_min is None or seg.p_max is None:
                    raise ConfigurationError(
                        "Melting line limits not set; call set_limits() first"
                    )
                if in_closed_range(seg.p_min, seg.p_max, p):
                    T = solve_bracketed(Residual(seg.evaluate, p), seg.T_min, seg.T_max)
                    if isinstance(T, BracketFailure):
                        raise ConvergenceError(
                            f"Melting line T(p) solve in segment {i} failed: {T.reason}"
                        )
                    return T
            raise SegmentLookupError(
                f"Unable to calculate polynomial_in_Tr melting line T(p) at p={p}", p
            )

        raise UnsupportedQueryError(
            f"T(p) is not available for {self.type.value} melting lines"
        )

    def __repr__(self):
        name = "UNSET" if self.type is None else self.type.value
        return f"MeltingLine({name}, {len(self.segments)} segments)"
