"""
Análisis de strings DC por MPPT — FV Engine.

Responsabilidad:
- Agrupar los strings configurados por entrada MPPT.
- Calcular por MPPT: Voc en frío, Vmp en caliente e Isc de cálculo.
- Entregar el peor caso agregado (máximos) para la validación DC.

Notas:
- Los coeficientes térmicos se usan con su signo (Voc: negativo => el frío sube la tensión).
- Strings en paralelo comparten tensión: la tensión del MPPT es la del string más largo.
- Isc_calc = Isc_STC × 1.25 no depende del número de paneles (corriente serie).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.errores import InvalidConfiguration, requerir_positivo
from electrical.modelos import (
    ClimateData,
    ConfiguredString,
    PanelElectricalSpec,
    StringResult,
    StringsAnalysis,
)

logger = logging.getLogger(__name__)

MPPT_POR_DEFECTO = 1


# ==========================================================
# Cálculos base
# ==========================================================
def voc_frio_panel(*, voc_stc: float, coef_voc_pct_c: float, t_min_c: float, t_stc_c: float = 25.0) -> float:
    """
    Voc(T) = Voc_STC * (1 + coef%/°C/100 * (T - 25))
    coef_voc_pct_c es %/°C (normalmente negativo).
    """
    return float(voc_stc) * (1.0 + (float(coef_voc_pct_c) / 100.0) * (float(t_min_c) - float(t_stc_c)))


def vmp_caliente_panel(*, vmp_stc: float, coef_vmp_pct_c: float, t_max_c: float, t_stc_c: float = 25.0) -> float:
    """
    Vmp(T) = Vmp_STC * (1 + coef%/°C/100 * (T - 25))
    """
    return float(vmp_stc) * (1.0 + (float(coef_vmp_pct_c) / 100.0) * (float(t_max_c) - float(t_stc_c)))


def isc_calculo(*, isc_stc: float, factor: float = 1.25) -> float:
    return float(isc_stc) * float(factor)


# ==========================================================
# Validación de entradas
# ==========================================================
def validar_panel(panel: PanelElectricalSpec) -> None:
    requerir_positivo("panel.voc_stc_v", panel.voc_stc_v)
    requerir_positivo("panel.vmp_stc_v", panel.vmp_stc_v)
    requerir_positivo("panel.isc_stc_a", panel.isc_stc_a)
    requerir_positivo("panel.power_w", panel.power_w)
    for campo in ("temp_coeff_voc_pct_c", "temp_coeff_vmp_pct_c"):
        v = getattr(panel, campo)
        if v is None:
            raise InvalidConfiguration(f"panel.{campo}", "valor requerido.")
        try:
            float(v)
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"panel.{campo}", f"debe ser numérico. Valor={v!r}") from e


def indice_mppt(s: ConfiguredString) -> int:
    """Índice MPPT efectivo: ausente (None/0) => MPPT 1 (configs previas a la asignación por MPPT)."""
    if s.mppt_index is None:
        return MPPT_POR_DEFECTO
    try:
        idx = int(s.mppt_index)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration("string.mppt_index", f"debe ser entero. Valor={s.mppt_index!r}") from e
    if idx == 0:
        return MPPT_POR_DEFECTO
    if idx < 0:
        raise InvalidConfiguration("string.mppt_index", f"debe ser >= 1. Valor={idx}")
    return idx


def agrupar_por_mppt(strings: Sequence[ConfiguredString]) -> Dict[int, List[int]]:
    """mppt_index -> [panel_count de cada string], en orden de configuración."""
    grupos: Dict[int, List[int]] = {}
    for k, s in enumerate(strings):
        try:
            n = int(s.panel_count)
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"strings[{k}].panel_count", f"debe ser entero. Valor={s.panel_count!r}") from e
        if n <= 0:
            raise InvalidConfiguration(f"strings[{k}].panel_count", f"debe ser > 0. Valor={n}")
        grupos.setdefault(indice_mppt(s), []).append(n)
    return grupos


def contar_strings_por_mppt(strings: Sequence[ConfiguredString]) -> Dict[int, int]:
    return {idx: len(paneles) for idx, paneles in agrupar_por_mppt(strings).items()}


def _composicion(paneles: Sequence[int]) -> str:
    if len(set(paneles)) == 1:
        return f"{len(paneles)}×{paneles[0]}"
    return "+".join(str(n) for n in paneles)


# ==========================================================
# API pública
# ==========================================================
def analyze_strings(
    strings: Sequence[ConfiguredString],
    panel: PanelElectricalSpec,
    climate: ClimateData,
    *,
    tablas: Optional[TablasElectricas] = None,
) -> StringsAnalysis:
    tablas = tablas or tablas_por_defecto()

    if not strings:
        raise InvalidConfiguration("strings", "se requiere al menos un string configurado.")
    validar_panel(panel)

    grupos = agrupar_por_mppt(strings)
    t_stc = float(tablas.t_stc_c)

    voc_panel = voc_frio_panel(
        voc_stc=panel.voc_stc_v,
        coef_voc_pct_c=panel.temp_coeff_voc_pct_c,
        t_min_c=climate.temp_min_c,
        t_stc_c=t_stc,
    )
    vmp_panel = vmp_caliente_panel(
        vmp_stc=panel.vmp_stc_v,
        coef_vmp_pct_c=panel.temp_coeff_vmp_pct_c,
        t_max_c=climate.temp_max_c,
        t_stc_c=t_stc,
    )
    isc_calc = isc_calculo(isc_stc=panel.isc_stc_a, factor=tablas.factor_seguridad_isc)

    resultados: List[StringResult] = []
    for idx in sorted(grupos):
        paneles = grupos[idx]
        n_max = max(paneles)
        resultados.append(
            StringResult(
                mppt_index=int(idx),
                total_panel_count=int(sum(paneles)),
                string_count=len(paneles),
                composition=_composicion(paneles),
                voc_cold_v=float(voc_panel * n_max),
                vmp_hot_v=float(vmp_panel * n_max),
                isc_calculation_a=float(isc_calc),
            )
        )

    analisis = StringsAnalysis(
        strings=tuple(resultados),
        voc_cold_v=max(r.voc_cold_v for r in resultados),
        vmp_hot_v=max(r.vmp_hot_v for r in resultados),
        isc_panel_a=float(panel.isc_stc_a),
        isc_calculation_a=float(isc_calc),
        mppt_count=len(grupos),
        max_panels_in_string=max(max(p) for p in grupos.values()),
        total_panel_count=sum(r.total_panel_count for r in resultados),
        parallel_counts=tuple((idx, len(grupos[idx])) for idx in sorted(grupos)),
    )
    logger.debug(
        "Strings: %d MPPT, Voc frío=%.2f V (Tmin=%s°C), Vmp caliente=%.2f V (Tmax=%s°C)",
        analisis.mppt_count,
        analisis.voc_cold_v,
        climate.temp_min_c,
        analisis.vmp_hot_v,
        climate.temp_max_c,
    )
    return analisis


__all__ = [
    "MPPT_POR_DEFECTO",
    "voc_frio_panel",
    "vmp_caliente_panel",
    "isc_calculo",
    "validar_panel",
    "indice_mppt",
    "agrupar_por_mppt",
    "contar_strings_por_mppt",
    "analyze_strings",
]
