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
Fluid files holding the ancillaries and melting line of a pure fluid.

A fluid file is a JSON document with the keys

* name, molar_mass (kg/mol)
* ancillaries: mapping of property key ("pS", "rhoL", "rhoV") to an
  ancillary entry, see ancillaries.ANCILLARY_CONFIG
* melting_line (optional): see melting_line.MELTING_LINE_CONFIG

Bundled fluids live in the data directory beside this module.
"""
import json
from pathlib import Path

import idaes.logger as idaeslog

from fluid_ancillaries.ancillaries import SaturationAncillaryFunction
from fluid_ancillaries.exceptions import ConfigurationError
from fluid_ancillaries.melting_line import MeltingLine

_log = idaeslog.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


class FluidAncillaries:
    """Ancillaries and melting line of one fluid."""

    def __init__(self, name, molar_mass=None, ancillaries=None, melting_line=None):
        self.name = name
        self.molar_mass = molar_mass
        self.ancillaries = dict(ancillaries or {})
        self.melting_line = melting_line

    @classmethod
    def from_dict(cls, data, name=None):
        name = data.get("name", name)
        ancillaries = {
            key: SaturationAncillaryFunction.from_config(entry)
            for key, entry in data.get("ancillaries", {}).items()
        }
        melting_line = None
        if "melting_line" in data:
            melting_line = MeltingLine.from_config(data["melting_line"])
        return cls(
            name,
            molar_mass=data.get("molar_mass"),
            ancillaries=ancillaries,
            melting_line=melting_line,
        )

    def ancillary(self, key):
        try:
            return self.ancillaries[key]
        except KeyError:
            raise ConfigurationError(
                f"Fluid {self.name} has no '{key}' ancillary "
                f"(available: {sorted(self.ancillaries)})"
            ) from None

    def __repr__(self):
        return (
            f"FluidAncillaries({self.name!r}, ancillaries={sorted(self.ancillaries)}, "
            f"melting_line={self.melting_line!r})"
        )


def available_fluids():
    """Names of the bundled fluids."""
    return sorted(p.stem for p in DATA_DIR.glob("*.json"))


def load_fluid(fluid):
    """
    Load a fluid by bundled name or from the path of a fluid file.
    """
    path = Path(fluid)
    if not path.suffix:
        path = DATA_DIR / f"{fluid}.json"
    if not path.is_file():
        raise ConfigurationError(
            f"Unknown fluid {fluid}; bundled fluids are {available_fluids()}"
        )

    _log.debug("Loading fluid file %s", path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    return FluidAncillaries.from_dict(data, name=path.stem)
