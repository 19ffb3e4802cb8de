# electrical/modelos.py
"""
Modelos del dominio eléctrico (contrato interno estable).

Todos los registros son value objects inmutables: se crean en cada cálculo
y no guardan estado entre llamadas. Las colecciones se exponen como tuplas.

Unidades en el nombre del campo: _v (V), _a (A), _w (W), _va (VA),
_kva (kVA), _kwc (kWc), _m (m), _mm2 (mm²), _c (°C), _pct (%), _pct_c (%/°C).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errores import InvalidConfiguration


# ==========================================================
# Enumeraciones
# ==========================================================
class Phase(str, Enum):
    MONO = "Mono"
    TRI = "Tri"


class InverterTechnology(str, Enum):
    STRING = "string"
    MICRO = "micro"
    HYBRID = "hybrid"


class RoofType(str, Enum):
    TUILE_MECANIQUE = "TUILE_MECANIQUE"
    TUILE_PLATE = "TUILE_PLATE"
    TUILE_CANAL = "TUILE_CANAL"
    FIBROCIMENT = "FIBROCIMENT"
    BAC_ACIER = "BAC_ACIER"
    ARDOISE = "ARDOISE"


class WindZone(int, Enum):
    ZONE_1 = 1
    ZONE_2 = 2
    ZONE_3 = 3
    ZONE_4 = 4
    ZONE_5 = 5


class WarningKind(str, Enum):
    VOLTAGE_EXCEEDED = "VoltageExceeded"
    VMP_BELOW_MPPT_MIN = "VmpBelowMpptMin"
    GPV_FUSE_REQUIRED = "GpvFuseRequired"
    VOLTAGE_DROP_ABOVE_TARGET = "VoltageDropAboveTarget"
    BREAKER_ABOVE_LADDER = "BreakerAboveLadder"
    MICRO_UNDER_PROVISIONED = "MicroUnderProvisioned"
    MICRO_OVER_PROVISIONED = "MicroOverProvisioned"
    SUBSCRIPTION_INSUFFICIENT = "SubscriptionInsufficient"
    SUBSCRIPTION_UNKNOWN = "SubscriptionUnknown"


@dataclass(frozen=True)
class ReportWarning:
    """Condición fuera de rango (no fatal): el reporte se genera igual y la celda se marca."""

    kind: WarningKind
    message: str
    value: Optional[float] = None
    limit: Optional[float] = None


# ==========================================================
# Entradas
# ==========================================================
@dataclass(frozen=True)
class PanelElectricalSpec:
    voc_stc_v: float
    vmp_stc_v: float
    isc_stc_a: float
    temp_coeff_voc_pct_c: float  # ej -0.27 (%/°C), normalmente negativo
    temp_coeff_vmp_pct_c: float  # ej -0.34 (%/°C)
    power_w: float


@dataclass(frozen=True)
class ConfiguredString:
    panel_count: int
    # None = configuración anterior a la asignación por MPPT (se trata como MPPT 1)
    mppt_index: Optional[int] = None
    phase: Optional[str] = None


@dataclass(frozen=True)
class InverterLimits:
    max_ac_power_w: float
    phase: Phase = Phase.MONO
    # None = dato externo ausente; se usan los defaults de las tablas
    vmax_dc_v: Optional[float] = None
    vmin_mppt_v: Optional[float] = None
    nominal_ac_voltage_v: Optional[float] = None
    technology: InverterTechnology = InverterTechnology.STRING


@dataclass(frozen=True)
class ClimateData:
    temp_min_c: float
    temp_max_c: float

    def __post_init__(self) -> None:
        if not float(self.temp_min_c) < float(self.temp_max_c):
            raise InvalidConfiguration(
                "climate",
                f"temp_min_c debe ser < temp_max_c ({self.temp_min_c} >= {self.temp_max_c}).",
            )


@dataclass(frozen=True)
class MicroBranchInput:
    branch_id: str
    name: str
    phase: Phase
    micro_count: int
    cable_length_m: float
    cable_section_mm2: float


# ==========================================================
# Resultados: strings DC
# ==========================================================
@dataclass(frozen=True)
class StringResult:
    mppt_index: int
    total_panel_count: int
    string_count: int
    composition: str  # ej "2×10" (strings × paneles) o "10+8"
    voc_cold_v: float
    vmp_hot_v: float
    isc_calculation_a: float


@dataclass(frozen=True)
class StringsAnalysis:
    strings: Tuple[StringResult, ...]
    voc_cold_v: float
    vmp_hot_v: float
    isc_panel_a: float
    isc_calculation_a: float
    mppt_count: int
    max_panels_in_string: int
    total_panel_count: int
    # (mppt_index, n_strings) ordenado por índice
    parallel_counts: Tuple[Tuple[int, int], ...]


# ==========================================================
# Resultados: protecciones
# ==========================================================
@dataclass(frozen=True)
class DisconnectCheck:
    required_current_a: float
    required_voltage_v: float
    rated_current_a: Optional[float] = None
    rated_voltage_v: Optional[float] = None
    current_ok: Optional[bool] = None
    voltage_ok: Optional[bool] = None
    # None = sin seccionador declarado (no evaluado), nunca "válido" por defecto
    is_ok: Optional[bool] = None


@dataclass(frozen=True)
class DcSafetyReport:
    voltage_exceeded: bool
    vmax_dc_v: float
    vmin_mppt_v: float
    vmp_below_mppt_min: bool
    max_parallel_strings_on_any_mppt: int
    gpv_fuse_required: bool
    gpv_fuse_min_a: Optional[float]
    disconnect: DisconnectCheck
    warnings: Tuple[ReportWarning, ...] = ()


@dataclass(frozen=True)
class AcSizing:
    nominal_ac_current_a: float
    recommended_breaker_a: Optional[int]  # None = corriente sobre la escalera
    rcd_type: str
    phase: Phase
    nominal_ac_voltage_v: float
    max_ac_power_w: float


# ==========================================================
# Resultados: conductores
# ==========================================================
@dataclass(frozen=True)
class VoltageDrop:
    current_a: float
    length_m: float
    section_mm2: float
    voltage_v: float
    phase: Phase
    drop_v: float
    drop_pct: float
    exceeds_target: bool


@dataclass(frozen=True)
class MicroBranch:
    branch_id: str
    name: str
    phase: Phase
    micro_count: int
    cable_length_m: float
    cable_section_mm2: float
    current_a: float
    drop_v: float
    drop_pct: float
    exceeds_target: bool


@dataclass(frozen=True)
class MicroBranchesReport:
    required_micros: int
    total_micros_configured: int
    micro_power_va: float
    branches: Tuple[MicroBranch, ...]
    worst_branch_drop_pct: float
    feeder_drop_pct: float
    production_drop_pct: float
    provisioning: str  # "OK" | "UNDER" | "OVER"
    exceeds_target: bool
    warnings: Tuple[ReportWarning, ...] = ()


# ==========================================================
# Resultados: suscripción y márgenes
# ==========================================================
@dataclass(frozen=True)
class SubscriptionStatus:
    recommended_kva: Optional[float]
    subscribed_kva: Optional[float]  # None = desconocido (AGCP no informado)
    is_ok: bool
    phase: Phase
    state: str  # "OK" | "INSUFFICIENT" | "UNKNOWN"
    warnings: Tuple[ReportWarning, ...] = ()

    @property
    def is_unknown(self) -> bool:
        return self.subscribed_kva is None


@dataclass(frozen=True)
class Margins:
    top: int
    bottom: int
    left: int
    right: int


__all__ = [
    "Phase",
    "InverterTechnology",
    "RoofType",
    "WindZone",
    "WarningKind",
    "ReportWarning",
    "PanelElectricalSpec",
    "ConfiguredString",
    "InverterLimits",
    "ClimateData",
    "MicroBranchInput",
    "StringResult",
    "StringsAnalysis",
    "DisconnectCheck",
    "DcSafetyReport",
    "AcSizing",
    "VoltageDrop",
    "MicroBranch",
    "MicroBranchesReport",
    "SubscriptionStatus",
    "Margins",
]
