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
import pytest
import pyomo.environ as pyo
from pyomo.environ import value
from pyomo.util.check_units import assert_units_consistent

from idaes.core import FlowsheetBlock
from idaes.core.util.model_statistics import degrees_of_freedom

from fluid_ancillaries.exceptions import ConfigurationError
from fluid_ancillaries.fluid_data import FluidAncillaries, load_fluid
from fluid_ancillaries.property_package import PhaseBoundaryParameterBlock


@pytest.fixture(scope="module")
def model():
    m = pyo.ConcreteModel()
    m.fs = FlowsheetBlock(dynamic=False)
    m.fs.params = PhaseBoundaryParameterBlock(fluid="water")
    m.fs.state = m.fs.params.build_state_block([0], defined_state=True)

    s = m.fs.state[0]
    s.temperature.fix(373.15)
    s.pressure.fix(101325.0)
    return m


@pytest.mark.component
class TestWaterPhaseBoundary:
    def test_build(self, model):
        params = model.fs.params
        assert list(params.component_list) == ["water"]
        assert set(params.phase_list) == {"Liq", "Vap"}
        assert value(params.mw) == 0.018015268

    def test_dof(self, model):
        assert degrees_of_freedom(model.fs.state[0]) == 0

    def test_units(self, model):
        assert_units_consistent(model)

    def test_pressure_sat(self, model):
        s = model.fs.state[0]
        pS = model.fs.params.fluid.ancillary("pS")
        assert value(s.pressure_sat) == pytest.approx(pS.evaluate(373.15), rel=1e-12)
        assert value(s.pressure_sat) == pytest.approx(101418.0, rel=1e-3)

    def test_dens_mol_phase(self, model):
        s = model.fs.state[0]
        fluid = model.fs.params.fluid
        assert value(s.dens_mol_phase["Liq"]) == pytest.approx(
            fluid.ancillary("rhoL").evaluate(373.15), rel=1e-12
        )
        assert value(s.dens_mol_phase["Vap"]) == pytest.approx(
            fluid.ancillary("rhoV").evaluate(373.15), rel=1e-12
        )
        assert value(s.dens_mol_phase["Liq"]) > value(s.dens_mol_phase["Vap"]) > 0

    def test_initialize(self, model):
        s = model.fs.state[0]
        model.fs.state.initialize()

        assert s.temperature.fixed
        assert s.pressure.fixed
        assert value(s.temperature_sat) == pytest.approx(373.124, abs=0.02)
        assert value(s.pressure) == pytest.approx(
            value(
                model.fs.params.fluid.ancillary("pS").expression(value(s.temperature_sat))
            ),
            rel=1e-9,
        )

    def test_initialize_supercritical(self, model):
        s = model.fs.state[0]
        s.temperature_sat.set_value(400.0)
        s.pressure.fix(3e7)
        model.fs.state.initialize()

        # No saturation temperature above the critical pressure; seed is kept
        assert value(s.temperature_sat) == 400.0
        s.pressure.fix(101325.0)


@pytest.mark.component
class TestCarbonDioxidePhaseBoundary:
    def test_fluid_object(self):
        fluid = load_fluid("carbon_dioxide")
        m = pyo.ConcreteModel()
        m.fs = FlowsheetBlock(dynamic=False)
        m.fs.params = PhaseBoundaryParameterBlock(fluid=fluid)
        m.fs.state = m.fs.params.build_state_block([0], defined_state=True)

        s = m.fs.state[0]
        s.temperature.fix(216.592)
        s.pressure.fix(1e6)
        assert m.fs.params.fluid.name == "carbon_dioxide"
        assert value(s.pressure_sat) == pytest.approx(517950.0, rel=1e-3)

        m.fs.state.initialize()
        assert value(s.pressure_sat) < 1e6
        assert value(s.temperature_sat) > 216.592


@pytest.mark.component
class TestConfiguration:
    def test_missing_fluid(self):
        m = pyo.ConcreteModel()
        m.fs = FlowsheetBlock(dynamic=False)
        with pytest.raises(ConfigurationError):
            m.fs.params = PhaseBoundaryParameterBlock()

    def test_missing_vapour_pressure(self):
        m = pyo.ConcreteModel()
        m.fs = FlowsheetBlock(dynamic=False)
        with pytest.raises(ConfigurationError, match="saturation pressure"):
            m.fs.params = PhaseBoundaryParameterBlock(fluid=FluidAncillaries("empty"))

    def test_without_densities(self):
        fluid = load_fluid("water")
        fluid = FluidAncillaries(
            "water", ancillaries={"pS": fluid.ancillary("pS")}
        )
        m = pyo.ConcreteModel()
        m.fs = FlowsheetBlock(dynamic=False)
        m.fs.params = PhaseBoundaryParameterBlock(fluid=fluid)
        m.fs.state = m.fs.params.build_state_block([0], defined_state=True)
        s = m.fs.state[0]
        s.temperature.fix(300.0)
        s.pressure.fix(101325.0)
        assert degrees_of_freedom(s) == 0
        assert value(s.pressure_sat) == pytest.approx(
            fluid.ancillary("pS").evaluate(300.0), rel=1e-12
        )
