"""
Caída de tensión en conductores de cobre — FV Engine.

    ΔU(V) = b × L × I × ρ / S
    ΔU(%) = ΔU / U × 100

b = 2 (monofásico, ida y vuelta) o √3 (trifásico), ρ = 0.023 Ω·mm²/m (cobre),
L = longitud simple (m), I (A), S = sección (mm²), U = tensión nominal de la fase.

El objetivo de 1 % es de diseño (se marca), no un límite que se imponga: el
cálculo no elige sección, informa la caída para la sección dada.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.errores import requerir_no_negativo, requerir_positivo
from electrical.modelos import Phase, VoltageDrop

logger = logging.getLogger(__name__)


def coeficiente_b(phase: Phase) -> float:
    return math.sqrt(3.0) if phase == Phase.TRI else 2.0


def caida_tension_v(*, b: float, l_m: float, i_a: float, s_mm2: float, rho_ohm_mm2_m: float) -> float:
    return (float(b) * float(l_m) * float(i_a) * float(rho_ohm_mm2_m)) / float(s_mm2)


def voltage_drop(
    *,
    current_a: float,
    length_m: float,
    section_mm2: float,
    phase: Phase,
    voltage_v: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> VoltageDrop:
    tablas = tablas or tablas_por_defecto()

    i = requerir_no_negativo("cable.current_a", current_a)
    l_m = requerir_positivo("cable.length_m", length_m)
    s = requerir_positivo("cable.section_mm2", section_mm2)
    u = requerir_positivo(
        "cable.voltage_v",
        voltage_v if voltage_v is not None else tablas.tension_nominal_v[phase.value],
    )

    du_v = caida_tension_v(b=coeficiente_b(phase), l_m=l_m, i_a=i, s_mm2=s, rho_ohm_mm2_m=tablas.resistividad_ohm_mm2_m)
    du_pct = du_v / u * 100.0

    return VoltageDrop(
        current_a=i,
        length_m=l_m,
        section_mm2=s,
        voltage_v=u,
        phase=phase,
        drop_v=du_v,
        drop_pct=du_pct,
        exceeds_target=du_pct > tablas.objetivo_caida_pct,
    )


def feeder_voltage_drop(
    *,
    nominal_ac_current_a: float,
    length_m: float,
    section_mm2: float,
    phase: Phase,
    voltage_v: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> VoltageDrop:
    """Liaison principal coffret AC -> punto de conexión con I = In AC del inversor."""
    vd = voltage_drop(
        current_a=nominal_ac_current_a,
        length_m=length_m,
        section_mm2=section_mm2,
        phase=phase,
        voltage_v=voltage_v,
        tablas=tablas,
    )
    if vd.exceeds_target:
        logger.warning("Caída de tensión AC %.2f %% por encima del objetivo (S=%s mm², L=%s m).",
                       vd.drop_pct, vd.section_mm2, vd.length_m)
    return vd


__all__ = [
    "coeficiente_b",
    "caida_tension_v",
    "voltage_drop",
    "feeder_voltage_drop",
]
