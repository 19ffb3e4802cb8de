# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from electrical.modelos import (
    ConfiguredString,
    InverterLimits,
    MicroBranchInput,
    PanelElectricalSpec,
    RoofType,
    WindZone,
)


@dataclass(frozen=True)
class ProjectConfig:
    """Snapshot completo de un proyecto (lo produce el editor de proyectos)."""

    panel: PanelElectricalSpec
    inverter: InverterLimits
    panel_count: int                      # total de paneles instalados (todos los campos)

    ac_cable_length_m: float              # coffret AC -> punto de conexión (longitud simple)
    ac_cable_section_mm2: float

    roof_type: RoofType = RoofType.TUILE_MECANIQUE
    wind_zone: WindZone = WindZone.ZONE_1

    strings: Tuple[ConfiguredString, ...] = ()   # vacío = sin strings DC (micro-inversores)

    micro_branches: Tuple[MicroBranchInput, ...] = ()
    micro_power_va: Optional[float] = None
    panels_per_micro: int = 1

    subscribed_kva: Optional[float] = None
    agcp_a: Optional[float] = None        # calibre AGCP (A), alternativa a subscribed_kva

    disconnect_rated_current_a: Optional[float] = None
    disconnect_rated_voltage_v: Optional[float] = None

    @property
    def installed_power_w(self) -> float:
        return float(self.panel.power_w) * int(self.panel_count)

    @property
    def installed_kwc(self) -> float:
        return self.installed_power_w / 1000.0
