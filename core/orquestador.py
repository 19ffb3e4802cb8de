# core/orquestador.py
"""
Ensamblado de reportes a partir de un snapshot de proyecto + clima.

Flujo lineal (sin retro-llamadas entre componentes):
    Proyecto + Clima → {Strings → Seguridad DC}
                     → {Dimensionado AC → Caída de tensión (liaison) → Ramales micro}
                     → {Suscripción}
                     → {Márgenes}

Funciones puras: mismas entradas => registros iguales. Sin estado compartido.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from electrical.conductores import analyze_micro_branches, feeder_voltage_drop
from electrical.margenes import recommended_margins
from electrical.modelos import ClimateData, MicroBranchesReport, ReportWarning, WarningKind
from electrical.paneles import analyze_strings, isc_calculo
from electrical.protecciones import limites_dc_efectivos, size_ac_output, validate_dc_safety
from electrical.suscripcion import subscription_status

from .configuracion import TablasElectricas, tablas_por_defecto
from .dominio.contrato import CompatibilityDetails, CompatibilityReport, ProjectEvaluation
from .modelo import ProjectConfig
from .validacion import validar_proyecto

logger = logging.getLogger(__name__)


# ==========================================================
# Helpers
# ==========================================================
def clima_efectivo(climate: Optional[ClimateData], *, tablas: TablasElectricas) -> ClimateData:
    if climate is not None:
        return climate
    t_min, t_max = tablas.clima_default_c
    logger.warning("Clima no resuelto; se usan defaults Tmin=%s°C / Tmax=%s°C.", t_min, t_max)
    return ClimateData(temp_min_c=t_min, temp_max_c=t_max)


def ratio_dc_ac(installed_power_w: float, max_ac_power_w: float) -> Optional[float]:
    if float(max_ac_power_w) <= 0.0:
        return None
    return float(installed_power_w) / float(max_ac_power_w)


def micros_requeridos(panel_count: int, panels_per_micro: int) -> int:
    return int(math.ceil(int(panel_count) / int(panels_per_micro)))


# ==========================================================
# Reportes
# ==========================================================
def build_compatibility_report(
    project: ProjectConfig,
    climate: Optional[ClimateData] = None,
    *,
    tablas: Optional[TablasElectricas] = None,
) -> CompatibilityReport:
    tablas = tablas or tablas_por_defecto()
    validar_proyecto(project)
    inv = project.inverter

    ac = size_ac_output(
        max_ac_power_w=inv.max_ac_power_w,
        phase=inv.phase,
        nominal_ac_voltage_v=inv.nominal_ac_voltage_v,
        technology=inv.technology,
        tablas=tablas,
    )
    feeder = feeder_voltage_drop(
        nominal_ac_current_a=ac.nominal_ac_current_a,
        length_m=project.ac_cable_length_m,
        section_mm2=project.ac_cable_section_mm2,
        phase=inv.phase,
        voltage_v=ac.nominal_ac_voltage_v,
        tablas=tablas,
    )

    warnings: List[ReportWarning] = []

    if project.strings:
        analisis = analyze_strings(project.strings, project.panel, clima_efectivo(climate, tablas=tablas), tablas=tablas)
        dc = validate_dc_safety(
            analisis,
            inv,
            disconnect_rated_current_a=project.disconnect_rated_current_a,
            disconnect_rated_voltage_v=project.disconnect_rated_voltage_v,
            tablas=tablas,
        )
        warnings.extend(dc.warnings)
        vmax, vmin = dc.vmax_dc_v, dc.vmin_mppt_v
        voc_cold, vmp_hot = analisis.voc_cold_v, analisis.vmp_hot_v
        isc_calc = analisis.isc_calculation_a
        mppt_count, max_panels = analisis.mppt_count, analisis.max_panels_in_string
        strings_analysis = analisis.strings
    else:
        # Sin strings DC (micro-inversores): valores DC no calculados (None), no cero
        dc = None
        vmax, vmin = limites_dc_efectivos(inv, tablas=tablas, avisar=False)
        voc_cold = vmp_hot = None
        isc_calc = isc_calculo(isc_stc=project.panel.isc_stc_a, factor=tablas.factor_seguridad_isc)
        mppt_count, max_panels = 0, 0
        strings_analysis = ()

    if ac.recommended_breaker_a is None:
        tope = tablas.escalera_disyuntores_a[-1]
        warnings.append(
            ReportWarning(
                kind=WarningKind.BREAKER_ABOVE_LADDER,
                message=f"In AC {ac.nominal_ac_current_a:.2f} A > mayor disyuntor de la escalera ({tope:g} A).",
                value=ac.nominal_ac_current_a,
                limit=float(tope),
            )
        )

    if feeder.exceeds_target:
        warnings.append(
            ReportWarning(
                kind=WarningKind.VOLTAGE_DROP_ABOVE_TARGET,
                message=f"Caída de tensión AC {feeder.drop_pct:.2f} % > objetivo {tablas.objetivo_caida_pct:.2f} %.",
                value=feeder.drop_pct,
                limit=tablas.objetivo_caida_pct,
            )
        )

    details = CompatibilityDetails(
        voc_cold_v=voc_cold,
        vmp_hot_v=vmp_hot,
        dc_ac_ratio=ratio_dc_ac(project.installed_power_w, inv.max_ac_power_w),
        vmax_inverter_v=vmax,
        vmin_mppt_v=vmin,
        isc_panel_a=float(project.panel.isc_stc_a),
        isc_calculation_a=isc_calc,
        nominal_ac_current_a=ac.nominal_ac_current_a,
        recommended_breaker_a=ac.recommended_breaker_a,
        rcd_type=ac.rcd_type,
        max_ac_power_w=ac.max_ac_power_w,
        mppt_count=mppt_count,
        max_panels_in_string=max_panels,
        strings_analysis=strings_analysis,
    )

    return CompatibilityReport(
        details=details,
        ac_sizing=ac,
        dc_safety=dc,
        feeder_drop=feeder,
        installed_power_w=project.installed_power_w,
        warnings=tuple(warnings),
    )


def build_micro_branches_report(
    project: ProjectConfig,
    *,
    feeder_drop_pct: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> Optional[MicroBranchesReport]:
    """None si el proyecto no tiene ramales de micro-inversores."""
    if not project.micro_branches:
        return None
    validar_proyecto(project)
    return analyze_micro_branches(
        project.micro_branches,
        micro_power_va=float(project.micro_power_va),
        required_micros=micros_requeridos(project.panel_count, project.panels_per_micro),
        feeder_drop_pct=feeder_drop_pct,
        tablas=tablas,
    )


def evaluate_project(
    project: ProjectConfig,
    climate: Optional[ClimateData] = None,
    *,
    tablas: Optional[TablasElectricas] = None,
) -> ProjectEvaluation:
    tablas = tablas or tablas_por_defecto()

    compat = build_compatibility_report(project, climate, tablas=tablas)
    micro = build_micro_branches_report(project, feeder_drop_pct=compat.feeder_drop.drop_pct, tablas=tablas)
    sub = subscription_status(
        installed_kwc=project.installed_kwc,
        phase=project.inverter.phase,
        subscribed_kva=project.subscribed_kva,
        agcp_a=project.agcp_a,
        tablas=tablas,
    )
    margins = recommended_margins(project.roof_type, project.wind_zone, tablas=tablas)

    logger.debug("Evaluación: %d warnings, %.2f kWc", len(compat.warnings), project.installed_kwc)
    return ProjectEvaluation(compatibility=compat, micro_branches=micro, subscription=sub, margins=margins)


__all__ = [
    "clima_efectivo",
    "ratio_dc_ac",
    "micros_requeridos",
    "build_compatibility_report",
    "build_micro_branches_report",
    "evaluate_project",
]
