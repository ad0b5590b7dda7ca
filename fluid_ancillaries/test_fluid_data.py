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
import json

import pytest

from fluid_ancillaries.ancillaries import AncillaryType
from fluid_ancillaries.exceptions import ConfigurationError
from fluid_ancillaries.fluid_data import FluidAncillaries, available_fluids, load_fluid
from fluid_ancillaries.melting_line import MeltingLineType


@pytest.mark.unit
def test_available_fluids():
    assert available_fluids() == ["carbon_dioxide", "water"]


@pytest.mark.unit
class TestLoadFluid:
    def test_water(self):
        water = load_fluid("water")
        assert water.name == "water"
        assert water.molar_mass == 0.018015268
        assert sorted(water.ancillaries) == ["pS", "rhoL", "rhoV"]
        assert water.ancillary("pS").type is AncillaryType.EXPONENTIAL
        assert water.ancillary("rhoL").type is AncillaryType.NOT_EXPONENTIAL
        assert water.ancillary("rhoV").type is AncillaryType.EXPONENTIAL
        assert water.melting_line.type is MeltingLineType.POLYNOMIAL_IN_TR
        assert len(water.melting_line.segments) == 4

    def test_carbon_dioxide(self):
        co2 = load_fluid("carbon_dioxide")
        # Span and Wagner (1996): saturated densities at the triple point
        T_t = 216.592
        assert co2.ancillary("rhoL").evaluate(T_t) * co2.molar_mass == pytest.approx(
            1178.46, rel=2e-3
        )
        assert co2.ancillary("rhoV").evaluate(T_t) * co2.molar_mass == pytest.approx(
            13.761, rel=2e-3
        )
        assert co2.melting_line.type is MeltingLineType.POLYNOMIAL_IN_THETA

    def test_saturated_densities_meet_at_critical_point(self):
        for name in available_fluids():
            fluid = load_fluid(name)
            Tc = fluid.ancillary("pS").Tmax
            assert fluid.ancillary("rhoL").evaluate(Tc) == fluid.ancillary("rhoV").evaluate(Tc)

    def test_from_path(self, tmp_path):
        path = tmp_path / "toy.json"
        path.write_text(
            json.dumps(
                {
                    "ancillaries": {
                        "pS": {
                            "type": "rational_polynomial",
                            "A": [1.0, 1.0],
                            "B": [1.0],
                            "max_abs_error": 0.0,
                        }
                    }
                }
            ),
            encoding="utf-8",
        )
        toy = load_fluid(str(path))
        assert toy.name == "toy"
        assert toy.molar_mass is None
        assert toy.melting_line is None
        assert toy.ancillary("pS").evaluate(2.0) == 3.0

    def test_unknown_fluid(self):
        with pytest.raises(ConfigurationError, match="Unknown fluid"):
            load_fluid("unobtainium")

    def test_unknown_ancillary(self):
        with pytest.raises(ConfigurationError, match="no 'hL' ancillary"):
            load_fluid("water").ancillary("hL")

    def test_repr(self):
        assert repr(FluidAncillaries("x")) == (
            "FluidAncillaries('x', ancillaries=[], melting_line=None)"
        )
