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
Saturation ancillary functions and piecewise melting lines of pure fluids.
"""
from fluid_ancillaries.ancillaries import (
    AncillaryType,
    ExponentialForm,
    NonExponentialForm,
    RationalPolynomialForm,
    SaturationAncillaryFunction,
)
from fluid_ancillaries.exceptions import (
    ConfigurationError,
    ConvergenceError,
    SegmentLookupError,
    UnsupportedQueryError,
)
from fluid_ancillaries.fluid_data import FluidAncillaries, available_fluids, load_fluid
from fluid_ancillaries.melting_line import (
    MeltingLine,
    MeltingLineType,
    MeltingQuantity,
    PolynomialInThetaSegment,
    PolynomialInTrSegment,
    SimonSegment,
)

__version__ = "0.1.0"
