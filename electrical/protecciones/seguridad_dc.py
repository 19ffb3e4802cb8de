"""
seguridad_dc.py — FV Engine

Subdominio protecciones DC.

Responsabilidad:
- Comparar el peor caso de strings (Voc frío / Vmp caliente) con los límites DC del inversor.
- Regla de fusibles gPV por strings en paralelo en un mismo MPPT.
- Exponer la verificación del seccionador DC (In >= Isc_calc, Un >= Uoc_max).

Notas:
- Nada aquí es fatal: las condiciones fuera de rango se devuelven como warnings.
- Regla gPV: fusibles requeridos si algún MPPT tiene más de 2 strings en paralelo.
  Es una simplificación (umbral fijo de la guía), NO un cálculo de selectividad.
- Sin límites del inversor se usan los defaults de las tablas (600 V mono / 1000 V tri, 80 V).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.modelos import (
    DcSafetyReport,
    DisconnectCheck,
    InverterLimits,
    ReportWarning,
    StringsAnalysis,
    WarningKind,
)

logger = logging.getLogger(__name__)


def limites_dc_efectivos(
    limits: InverterLimits,
    *,
    tablas: TablasElectricas,
    avisar: bool = True,
) -> Tuple[float, float]:
    """
    (vmax_dc_v, vmin_mppt_v) con fallback documentado cuando falta el dato externo.

    avisar=False: sólo informativo (proyecto sin strings DC), sin warning en el log.
    """
    fase = limits.phase.value
    vmax = limits.vmax_dc_v
    if vmax is None or float(vmax) <= 0.0:
        vmax = tablas.vmax_dc_default_v[fase]
        if avisar:
            logger.warning("Vdc_max del inversor no informado; se usa default %.0f V (%s).", vmax, fase)

    vmin = limits.vmin_mppt_v
    if vmin is None or float(vmin) <= 0.0:
        vmin = tablas.vmin_mppt_default_v
        if avisar:
            logger.warning("V_MPPT min del inversor no informado; se usa default %.0f V.", vmin)

    return float(vmax), float(vmin)


def fusible_gpv(
    *,
    max_strings_paralelo: int,
    isc_panel_a: float,
    umbral: int = 2,
    factor: float = 1.5,
) -> Tuple[bool, Optional[float]]:
    """
    Criterio simplificado: fusibles gPV si hay más de `umbral` strings en paralelo
    en un mismo MPPT. In_min = factor × Isc_módulo.
    """
    requerido = int(max_strings_paralelo) > int(umbral)
    if not requerido:
        return False, None
    return True, float(isc_panel_a) * float(factor)


def verificar_seccionador(
    *,
    isc_calculo_a: float,
    voc_frio_v: float,
    in_nominal_a: Optional[float] = None,
    un_nominal_v: Optional[float] = None,
) -> DisconnectCheck:
    """Seccionador DC: In >= Isc_calc y Un >= Uoc_max. Sin datos del equipo => no evaluado (None)."""
    current_ok = None if in_nominal_a is None else float(in_nominal_a) >= float(isc_calculo_a)
    voltage_ok = None if un_nominal_v is None else float(un_nominal_v) >= float(voc_frio_v)

    if current_ok is None or voltage_ok is None:
        is_ok = False if (current_ok is False or voltage_ok is False) else None
    else:
        is_ok = current_ok and voltage_ok

    return DisconnectCheck(
        required_current_a=float(isc_calculo_a),
        required_voltage_v=float(voc_frio_v),
        rated_current_a=None if in_nominal_a is None else float(in_nominal_a),
        rated_voltage_v=None if un_nominal_v is None else float(un_nominal_v),
        current_ok=current_ok,
        voltage_ok=voltage_ok,
        is_ok=is_ok,
    )


def validate_dc_safety(
    analysis: StringsAnalysis,
    limits: InverterLimits,
    *,
    disconnect_rated_current_a: Optional[float] = None,
    disconnect_rated_voltage_v: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> DcSafetyReport:
    tablas = tablas or tablas_por_defecto()
    vmax_dc, vmin_mppt = limites_dc_efectivos(limits, tablas=tablas)

    warnings: List[ReportWarning] = []

    voltage_exceeded = analysis.voc_cold_v > vmax_dc
    if voltage_exceeded:
        warnings.append(
            ReportWarning(
                kind=WarningKind.VOLTAGE_EXCEEDED,
                message=f"Voc frío string {analysis.voc_cold_v:.1f} V > Vdc_max {vmax_dc:.1f} V.",
                value=analysis.voc_cold_v,
                limit=vmax_dc,
            )
        )

    # El agregado vmp_hot_v es el máximo; contra V_MPPT min el peor caso es el MPPT más bajo
    peor = min(analysis.strings, key=lambda r: r.vmp_hot_v, default=None)
    vmp_min = peor.vmp_hot_v if peor is not None else analysis.vmp_hot_v
    vmp_bajo = vmp_min < vmin_mppt
    if vmp_bajo:
        donde = f"MPPT {peor.mppt_index}" if peor is not None else "string"
        warnings.append(
            ReportWarning(
                kind=WarningKind.VMP_BELOW_MPPT_MIN,
                message=f"Vmp caliente {donde} {vmp_min:.1f} V < V_MPPT min {vmin_mppt:.1f} V.",
                value=vmp_min,
                limit=vmin_mppt,
            )
        )

    max_paralelo = max((n for _, n in analysis.parallel_counts), default=0)
    requerido, in_min = fusible_gpv(
        max_strings_paralelo=max_paralelo,
        isc_panel_a=analysis.isc_panel_a,
        umbral=tablas.umbral_strings_fusible_gpv,
        factor=tablas.factor_fusible_gpv,
    )
    if requerido:
        warnings.append(
            ReportWarning(
                kind=WarningKind.GPV_FUSE_REQUIRED,
                message=(
                    f"{max_paralelo} strings en paralelo en un mismo MPPT: prever fusibles gPV "
                    f"(In >= {in_min:.2f} A)."
                ),
                value=float(max_paralelo),
                limit=float(tablas.umbral_strings_fusible_gpv),
            )
        )

    seccionador = verificar_seccionador(
        isc_calculo_a=analysis.isc_calculation_a,
        voc_frio_v=analysis.voc_cold_v,
        in_nominal_a=disconnect_rated_current_a,
        un_nominal_v=disconnect_rated_voltage_v,
    )

    for w in warnings:
        logger.warning("DC: %s", w.message)

    return DcSafetyReport(
        voltage_exceeded=voltage_exceeded,
        vmax_dc_v=vmax_dc,
        vmin_mppt_v=vmin_mppt,
        vmp_below_mppt_min=vmp_bajo,
        max_parallel_strings_on_any_mppt=int(max_paralelo),
        gpv_fuse_required=requerido,
        gpv_fuse_min_a=in_min,
        disconnect=seccionador,
        warnings=tuple(warnings),
    )


__all__ = [
    "limites_dc_efectivos",
    "fusible_gpv",
    "verificar_seccionador",
    "validate_dc_safety",
]
