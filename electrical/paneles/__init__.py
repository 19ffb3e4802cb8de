# Paneles FV — API pública del dominio paneles: análisis de strings DC por MPPT.
from __future__ import annotations

from .analisis_strings import (
    MPPT_POR_DEFECTO,
    agrupar_por_mppt,
    analyze_strings,
    contar_strings_por_mppt,
    indice_mppt,
    isc_calculo,
    validar_panel,
    vmp_caliente_panel,
    voc_frio_panel,
)

__all__ = [
    "MPPT_POR_DEFECTO",
    "analyze_strings",
    "agrupar_por_mppt",
    "contar_strings_por_mppt",
    "indice_mppt",
    "validar_panel",
    "voc_frio_panel",
    "vmp_caliente_panel",
    "isc_calculo",
]
