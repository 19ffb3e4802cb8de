"""
dimensionado_ac.py — FV Engine

Subdominio protecciones AC.

Responsabilidad:
- Corriente nominal AC de salida del inversor: I = P / (U × (√3 si trifásico)).
- Disyuntor: siguiente tamaño estándar >= I (escalera inyectada desde tablas).
  Sin escalón suficiente => None (nunca un disyuntor menor que I).
- Tipo de diferencial (DDR 30 mA) por tecnología de inversor.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Sequence

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.errores import InvalidConfiguration, requerir_no_negativo
from electrical.modelos import AcSizing, InverterTechnology, Phase

logger = logging.getLogger(__name__)


def factor_fase(phase: Phase) -> float:
    return math.sqrt(3.0) if phase == Phase.TRI else 1.0


def tension_nominal(phase: Phase, voltage_v: Optional[float], *, tablas: TablasElectricas) -> float:
    if voltage_v is None or float(voltage_v) <= 0.0:
        return float(tablas.tension_nominal_v[phase.value])
    return float(voltage_v)


def corriente_nominal_ac(*, max_ac_power_w: float, voltage_v: float, phase: Phase) -> float:
    p = requerir_no_negativo("inverter.max_ac_power_w", max_ac_power_w)
    if float(voltage_v) <= 0.0:
        raise InvalidConfiguration("inverter.nominal_ac_voltage_v", f"debe ser > 0. Valor={voltage_v!r}")
    return p / (float(voltage_v) * factor_fase(phase))


def siguiente_disyuntor(i_a: float, *, escalera: Sequence[float]) -> Optional[int]:
    """Devuelve el siguiente tamaño estándar >= i_a. None si i_a supera el último escalón."""
    x = float(i_a)
    for s in escalera:
        if x <= float(s):
            return int(s)
    logger.warning("Corriente %.2f A supera la escalera de disyuntores (máx %s A).", x, escalera[-1])
    return None


def tipo_diferencial(technology: InverterTechnology, *, tabla: Mapping[str, str]) -> str:
    try:
        return str(tabla[technology.value])
    except KeyError as e:
        raise InvalidConfiguration("inverter.technology", f"sin tipo de diferencial en tablas: {technology.value}") from e


def size_ac_output(
    *,
    max_ac_power_w: float,
    phase: Phase,
    nominal_ac_voltage_v: Optional[float] = None,
    technology: InverterTechnology = InverterTechnology.STRING,
    tablas: Optional[TablasElectricas] = None,
) -> AcSizing:
    tablas = tablas or tablas_por_defecto()
    u = tension_nominal(phase, nominal_ac_voltage_v, tablas=tablas)
    i_nom = corriente_nominal_ac(max_ac_power_w=max_ac_power_w, voltage_v=u, phase=phase)
    breaker = siguiente_disyuntor(i_nom, escalera=tablas.escalera_disyuntores_a)
    rcd = tipo_diferencial(technology, tabla=tablas.tipo_diferencial)

    logger.debug("AC: P=%.0f W, U=%.0f V (%s) => In=%.2f A, disyuntor %s A, DDR tipo %s",
                 float(max_ac_power_w), u, phase.value, i_nom, breaker, rcd)

    return AcSizing(
        nominal_ac_current_a=float(i_nom),
        recommended_breaker_a=breaker,
        rcd_type=rcd,
        phase=phase,
        nominal_ac_voltage_v=float(u),
        max_ac_power_w=float(max_ac_power_w),
    )


__all__ = [
    "factor_fase",
    "tension_nominal",
    "corriente_nominal_ac",
    "siguiente_disyuntor",
    "tipo_diferencial",
    "size_ac_output",
]
