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
Saturation ancillary functions.

An ancillary is a closed-form approximation to a saturation property (vapour
pressure, saturated liquid or vapour density) as a function of temperature.
Three forms are supported:

* rational polynomial:  value = P(T) / Q(T)
* non-exponential:      value = reducing_value * (1 + sum(n_i * THETA**t_i))
* exponential:          value = reducing_value * exp(tau_r * sum(n_i * THETA**t_i))

where THETA = 1 - T/T_r and tau_r is T_r/T when using_tau_r is set, else 1.
Ancillaries are property agnostic; the caller decides what quantity and units
an instance represents.
"""
import enum

import numpy as np
from numpy.polynomial import polynomial as npoly

from pyomo.common.config import Bool, ConfigDict, ConfigValue, ListOf
from pyomo.environ import exp

import idaes.logger as idaeslog

from fluid_ancillaries.exceptions import ConfigurationError
from fluid_ancillaries.solvers import BracketFailure, Residual, solve_bracketed, solve_open

_log = idaeslog.getLogger(__name__)


class AncillaryType(enum.Enum):
    RATIONAL_POLYNOMIAL = "rational_polynomial"
    EXPONENTIAL = "exponential"
    NOT_EXPONENTIAL = "rhoLnoexp"


ANCILLARY_CONFIG = ConfigDict()
ANCILLARY_CONFIG.declare(
    "type",
    ConfigValue(default="", domain=str, description="Functional form tag"),
)
ANCILLARY_CONFIG.declare(
    "A",
    ConfigValue(domain=ListOf(float), description="Numerator coefficients"),
)
ANCILLARY_CONFIG.declare(
    "B",
    ConfigValue(domain=ListOf(float), description="Denominator coefficients"),
)
ANCILLARY_CONFIG.declare(
    "max_abs_error",
    ConfigValue(domain=float, description="Maximum absolute error of the fit"),
)
ANCILLARY_CONFIG.declare(
    "n",
    ConfigValue(domain=ListOf(float), description="Term coefficients"),
)
ANCILLARY_CONFIG.declare(
    "t",
    ConfigValue(domain=ListOf(float), description="Term exponents"),
)
ANCILLARY_CONFIG.declare(
    "Tmin",
    ConfigValue(domain=float, description="Lower temperature of validity"),
)
ANCILLARY_CONFIG.declare(
    "Tmax",
    ConfigValue(domain=float, description="Upper temperature of validity"),
)
ANCILLARY_CONFIG.declare(
    "reducing_value",
    ConfigValue(domain=float, description="Value the correlation is reduced by"),
)
ANCILLARY_CONFIG.declare(
    "using_tau_r",
    ConfigValue(default=False, domain=Bool, description="Multiply sum by T_r/T"),
)
ANCILLARY_CONFIG.declare(
    "T_r",
    ConfigValue(domain=float, description="Reducing temperature"),
)


class RationalPolynomialForm:
    """
    Ratio of two polynomials in T, coefficients ordered lowest power first.
    """

    type = AncillaryType.RATIONAL_POLYNOMIAL

    def __init__(self, A, B, max_abs_error=None):
        if len(A) == 0 or len(B) == 0:
            raise ConfigurationError(
                "Rational polynomial ancillary needs numerator and denominator coefficients"
            )
        self.A = np.asarray(A, dtype=float)
        self.B = np.asarray(B, dtype=float)
        # Informational only, never enforced
        self.max_abs_error = max_abs_error

    def evaluate(self, T):
        return float(npoly.polyval(T, self.A) / npoly.polyval(T, self.B))

    def expression(self, T):
        num = sum(float(a) * T**i for i, a in enumerate(self.A))
        den = sum(float(b) * T**i for i, b in enumerate(self.B))
        return num / den


class _TermForm:
    # Shared by the exponential and non-exponential forms
    def __init__(self, n, t, reducing_value, T_r):
        if len(n) != len(t):
            raise ConfigurationError(
                f"Ancillary coefficient and exponent lengths differ "
                f"({len(n)} != {len(t)})"
            )
        self.n = np.asarray(n, dtype=float)
        self.t = np.asarray(t, dtype=float)
        self.reducing_value = reducing_value
        self.T_r = T_r

    def summation(self, T):
        theta = 1 - T / self.T_r
        # Fractional powers of negative theta (T > T_r) give nan
        with np.errstate(invalid="ignore"):
            s = self.n * np.power(theta, self.t)
        return s.sum()

    def summation_expression(self, T):
        theta = 1 - T / self.T_r
        return sum(float(n_i) * theta ** float(t_i) for n_i, t_i in zip(self.n, self.t))


class NonExponentialForm(_TermForm):
    type = AncillaryType.NOT_EXPONENTIAL

    def evaluate(self, T):
        return float(self.reducing_value * (1 + self.summation(T)))

    def expression(self, T):
        return self.reducing_value * (1 + self.summation_expression(T))


class ExponentialForm(_TermForm):
    type = AncillaryType.EXPONENTIAL

    def __init__(self, n, t, reducing_value, T_r, using_tau_r=False):
        super().__init__(n, t, reducing_value, T_r)
        self.using_tau_r = using_tau_r

    def evaluate(self, T):
        tau_r = self.T_r / T if self.using_tau_r else 1.0
        return float(self.reducing_value * np.exp(tau_r * self.summation(T)))

    def expression(self, T):
        tau_r = self.T_r / T if self.using_tau_r else 1.0
        return self.reducing_value * exp(tau_r * self.summation_expression(T))


class SaturationAncillaryFunction:
    """
    Saturation ancillary of one functional form with its validity range.

    Args:
        form: RationalPolynomialForm, ExponentialForm, NonExponentialForm or
            None for an ancillary that has not been configured
        Tmin, Tmax: temperature range used as the bracket by invert(). Not
            enforced by evaluate(), which extrapolates.
    """

    def __init__(self, form=None, Tmin=None, Tmax=None):
        self.form = form
        self.Tmin = Tmin
        self.Tmax = Tmax

    @classmethod
    def from_config(cls, data):
        """
        Build an ancillary from a fluid-file entry.

        The type tag is matched case sensitively: "rational_polynomial" and
        "rhoLnoexp" select those forms, any other tag the exponential form.
        """
        try:
            config = ANCILLARY_CONFIG(
                {k: v for k, v in data.items() if k in ANCILLARY_CONFIG}
            )
        except ValueError as err:
            raise ConfigurationError(f"Invalid ancillary entry: {err}") from err

        if config.type == AncillaryType.RATIONAL_POLYNOMIAL.value:
            _require(config, ("A", "B"))
            form = RationalPolynomialForm(config.A, config.B, config.max_abs_error)
        else:
            _require(config, ("n", "t", "reducing_value", "T_r", "Tmin", "Tmax"))
            if config.type == AncillaryType.NOT_EXPONENTIAL.value:
                form = NonExponentialForm(
                    config.n, config.t, config.reducing_value, config.T_r
                )
            else:
                form = ExponentialForm(
                    config.n,
                    config.t,
                    config.reducing_value,
                    config.T_r,
                    using_tau_r=config.using_tau_r,
                )
        return cls(form, Tmin=config.Tmin, Tmax=config.Tmax)

    @property
    def type(self):
        """AncillaryType of the configured form, None if unset."""
        return None if self.form is None else self.form.type

    def _checked_form(self):
        if self.form is None:
            raise ConfigurationError("Saturation ancillary type not set")
        return self.form

    def evaluate(self, T):
        """Value of the ancillary at temperature T."""
        return self._checked_form().evaluate(T)

    def expression(self, T):
        """Ancillary built with pyomo intrinsics, for use in model expressions."""
        return self._checked_form().expression(T)

    def invert(self, value):
        """
        Temperature at which the ancillary equals value.

        Brent's method on [Tmin, Tmax] is tried first; if it cannot bracket
        or converge, the secant method is started from Tmax.
        """
        form = self._checked_form()
        if self.Tmin is None or self.Tmax is None:
            raise ConfigurationError(
                f"Cannot invert {form.type.name} ancillary without Tmin and Tmax"
            )

        residual = Residual(form.evaluate, value)
        T = solve_bracketed(residual, self.Tmin, self.Tmax)
        if isinstance(T, BracketFailure):
            _log.debug(
                "Bracketed inversion of ancillary for %s failed (%s), "
                "falling back to secant from Tmax",
                value,
                T.reason,
            )
            T = solve_open(residual, self.Tmax)
        return T

    def __repr__(self):
        name = "UNSET" if self.form is None else self.form.type.name
        return f"SaturationAncillaryFunction({name}, Tmin={self.Tmin}, Tmax={self.Tmax})"


def _require(config, keys):
    missing = [k for k in keys if config[k] is None]
    if missing:
        raise ConfigurationError(f"Ancillary entry missing required keys: {missing}")
