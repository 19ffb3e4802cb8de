from __future__ import annotations

from .dimensionado_ac import (
    corriente_nominal_ac,
    factor_fase,
    siguiente_disyuntor,
    size_ac_output,
    tension_nominal,
    tipo_diferencial,
)
from .seguridad_dc import fusible_gpv, limites_dc_efectivos, validate_dc_safety, verificar_seccionador

__all__ = [
    # DC
    "validate_dc_safety",
    "limites_dc_efectivos",
    "fusible_gpv",
    "verificar_seccionador",
    # AC
    "size_ac_output",
    "corriente_nominal_ac",
    "siguiente_disyuntor",
    "tipo_diferencial",
    "tension_nominal",
    "factor_fase",
]
