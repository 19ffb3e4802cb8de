from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from electrical.modelos import (
    AcSizing,
    DcSafetyReport,
    Margins,
    MicroBranchesReport,
    ReportWarning,
    StringResult,
    SubscriptionStatus,
    VoltageDrop,
)


# =============================
# Reporte de compatibilidad
# =============================

@dataclass(frozen=True)
class CompatibilityDetails:
    # None = no calculado (proyecto sin strings DC, ej. micro-inversores), distinto de 0
    voc_cold_v: Optional[float]
    vmp_hot_v: Optional[float]
    dc_ac_ratio: Optional[float]
    vmax_inverter_v: float
    vmin_mppt_v: float
    isc_panel_a: float
    isc_calculation_a: float
    nominal_ac_current_a: float
    recommended_breaker_a: Optional[int]  # None = corriente sobre la escalera
    rcd_type: str
    max_ac_power_w: float
    mppt_count: int
    max_panels_in_string: int
    strings_analysis: Tuple[StringResult, ...]


@dataclass(frozen=True)
class CompatibilityReport:
    details: CompatibilityDetails
    ac_sizing: AcSizing
    dc_safety: Optional[DcSafetyReport]
    feeder_drop: VoltageDrop
    installed_power_w: float
    warnings: Tuple[ReportWarning, ...]

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


# =============================
# Evaluación completa
# =============================

@dataclass(frozen=True)
class ProjectEvaluation:
    compatibility: CompatibilityReport
    micro_branches: Optional[MicroBranchesReport]
    subscription: SubscriptionStatus
    margins: Margins

    @property
    def warnings(self) -> Tuple[ReportWarning, ...]:
        out = list(self.compatibility.warnings)
        if self.micro_branches is not None:
            out.extend(self.micro_branches.warnings)
        out.extend(self.subscription.warnings)
        return tuple(out)
