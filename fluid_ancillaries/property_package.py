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
Class-based IDAES property package for the phase boundaries of a pure fluid.

State variables are temperature and pressure. The saturation ancillaries of
the fluid provide:

- pressure_sat: vapour pressure at the state temperature ("pS")
- dens_mol_phase: saturated liquid and vapour densities ("rhoL", "rhoV")
- temperature_sat: saturation temperature at the state pressure, a variable
  defined by eq_temperature_sat and seeded by inverting "pS" on initialize

Ancillary correlations are written in SI units: K, Pa and mol/m^3.
"""
from pyomo.common.config import ConfigValue
from pyomo.environ import Constraint, Expression, Param, Var, units as pyunits, value

from idaes.core import (
    Component,
    LiquidPhase,
    PhysicalParameterBlock,
    StateBlock,
    StateBlockData,
    VaporPhase,
    declare_process_block_class,
)
from idaes.core.util.initialization import fix_state_vars, revert_state_vars
import idaes.logger as idaeslog

from fluid_ancillaries.exceptions import ConfigurationError, ConvergenceError
from fluid_ancillaries.fluid_data import FluidAncillaries, load_fluid

_log = idaeslog.getLogger(__name__)


@declare_process_block_class("PhaseBoundaryParameterBlock")
class PhaseBoundaryParameterData(PhysicalParameterBlock):
    CONFIG = PhysicalParameterBlock.CONFIG()
    CONFIG.declare(
        "fluid",
        ConfigValue(
            default=None,
            description="Fluid name, fluid file path or FluidAncillaries object",
        ),
    )

    def build(self):
        super().build()
        self._state_block_class = PhaseBoundaryStateBlock

        fluid = self.config.fluid
        if fluid is None:
            raise ConfigurationError(f"{self.name} requires a fluid argument")
        if not isinstance(fluid, FluidAncillaries):
            fluid = load_fluid(fluid)
        if "pS" not in fluid.ancillaries:
            raise ConfigurationError(
                f"{self.name}: fluid {fluid.name} has no saturation pressure ancillary"
            )
        self.fluid = fluid

        # Phases
        self.Liq = LiquidPhase()
        self.Vap = VaporPhase()

        # Component
        self.add_component(fluid.name, Component())

        if fluid.molar_mass is not None:
            self.mw = Param(
                initialize=fluid.molar_mass,
                mutable=True,
                units=pyunits.kg / pyunits.mol,
                doc="Molecular weight",
            )

    @classmethod
    def define_metadata(cls, obj):
        obj.add_properties(
            {
                "temperature": {"method": None},
                "pressure": {"method": None},
                "pressure_sat": {"method": None},
                "temperature_sat": {"method": None},
                "dens_mol_phase": {"method": None},
            }
        )
        obj.add_default_units(
            {
                "time": pyunits.s,
                "length": pyunits.m,
                "mass": pyunits.kg,
                "amount": pyunits.mol,
                "temperature": pyunits.K,
            }
        )


class _PhaseBoundaryStateBlock(StateBlock):
    def initialize(
        blk,
        state_args=None,
        state_vars_fixed=False,
        hold_state=False,
        outlvl=idaeslog.NOTSET,
        solver=None,
        optarg=None,
    ):
        init_log = idaeslog.getInitLogger(blk.name, outlvl, tag="properties")

        if state_vars_fixed:
            flags = {}
        else:
            flags = fix_state_vars(blk, state_args)

        for b in blk.values():
            b._set_temperature_sat()
        init_log.info("Initialization complete")

        if hold_state:
            return flags
        if not state_vars_fixed:
            revert_state_vars(blk, flags)
        return None

    def release_state(blk, flags, outlvl=idaeslog.NOTSET):
        if flags is not None:
            revert_state_vars(blk, flags)


@declare_process_block_class(
    "PhaseBoundaryStateBlock", block_class=_PhaseBoundaryStateBlock
)
class PhaseBoundaryStateBlockData(StateBlockData):
    def build(self):
        super().build()
        fluid = self.params.fluid
        pS = fluid.ancillary("pS")

        self.temperature = Var(initialize=298.15, bounds=(1.0, 5000.0), units=pyunits.K)
        self.pressure = Var(initialize=101325.0, bounds=(1e-6, 1e11), units=pyunits.Pa)

        self.pressure_sat = Expression(
            expr=pS.expression(self.temperature / pyunits.K) * pyunits.Pa,
            doc="Saturation pressure at the state temperature",
        )

        if "rhoL" in fluid.ancillaries and "rhoV" in fluid.ancillaries:
            self.dens_mol_phase = Expression(
                self.params.phase_list,
                rule=lambda b, p: fluid.ancillary("rhoL" if p == "Liq" else "rhoV").expression(
                    b.temperature / pyunits.K
                )
                * pyunits.mol
                / pyunits.m**3,
                doc="Saturated phase molar density at the state temperature",
            )

        if pS.Tmin is not None and pS.Tmax is not None:
            t_bounds = (pS.Tmin, pS.Tmax)
            t_init = 0.5 * (pS.Tmin + pS.Tmax)
        else:
            t_bounds = (None, None)
            t_init = 298.15
        self.temperature_sat = Var(
            initialize=t_init,
            bounds=t_bounds,
            units=pyunits.K,
            doc="Saturation temperature at the state pressure",
        )
        self.eq_temperature_sat = Constraint(
            expr=self.pressure
            == pS.expression(self.temperature_sat / pyunits.K) * pyunits.Pa
        )

    def _set_temperature_sat(self):
        pS = self.params.fluid.ancillary("pS")
        p = value(self.pressure)
        try:
            T = pS.invert(p)
        except ConvergenceError as err:
            _log.warning(
                "%s: could not seed temperature_sat at p=%s Pa: %s", self.name, p, err
            )
            return
        self.temperature_sat.set_value(T)

    def define_state_vars(self):
        return {
            "temperature": self.temperature,
            "pressure": self.pressure,
        }
