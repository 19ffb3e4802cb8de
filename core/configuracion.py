# core/configuracion.py
"""
Carga de las tablas estáticas del motor (escalera de disyuntores, niveles de
suscripción, defaults de límites DC, márgenes por zona de viento, ...).

Fuente única: core/config/tablas_electricas.yaml. Los tests y callers pueden
inyectar variantes con `construir_tablas_efectivas(overrides)`.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "config"
ARCHIVO_TABLAS = CONFIG_DIR / "tablas_electricas.yaml"

_SECCIONES = ("dc", "ac", "conductores", "suscripcion", "margenes")


def _leer_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"No existe config: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config inválida (debe ser dict): {path}")
    return data


def _req(d: Mapping[str, Any], k: str, ctx: str) -> Any:
    if not isinstance(d, Mapping) or k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Mapping[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


def _por_fase(d: Mapping[str, Any], k: str, ctx: str) -> Mapping[str, float]:
    tabla = _req(d, k, ctx)
    return _solo_lectura({fase: _req_num(tabla, fase, f"{ctx}.{k}") for fase in ("Mono", "Tri")})


def _solo_lectura(d: Dict[Any, Any]) -> Mapping[Any, Any]:
    # Las tablas se comparten (cache de tablas_por_defecto): vistas de sólo lectura
    return MappingProxyType(dict(d))


def _escalera(valores: Any, ctx: str) -> Tuple[float, ...]:
    if not isinstance(valores, (list, tuple)) or not valores:
        raise ValueError(f"{ctx} debe ser una lista no vacía.")
    try:
        out = tuple(sorted(float(v) for v in valores))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{ctx} debe contener sólo números. Valor={valores!r}") from e
    return out


# ==========================================================
# Modelo de tablas
# ==========================================================
@dataclass(frozen=True)
class TablasElectricas:
    # DC
    factor_seguridad_isc: float
    umbral_strings_fusible_gpv: int
    factor_fusible_gpv: float
    t_stc_c: float
    vmax_dc_default_v: Mapping[str, float]
    vmin_mppt_default_v: float
    clima_default_c: Tuple[float, float]  # (temp_min_c, temp_max_c)
    # AC
    tension_nominal_v: Mapping[str, float]
    escalera_disyuntores_a: Tuple[float, ...]
    tipo_diferencial: Mapping[str, str]
    # Conductores
    resistividad_ohm_mm2_m: float
    objetivo_caida_pct: float
    # Suscripción
    niveles_kva: Mapping[str, Tuple[float, ...]]
    factor_holgura: float
    kva_por_amperio_agcp: Mapping[str, float]
    # Márgenes
    base_por_zona_mm: Mapping[int, int]
    ajuste_lateral_por_techo_mm: Mapping[str, int]


def tablas_desde_dict(doc: Mapping[str, Any]) -> TablasElectricas:
    """Valida el documento YAML y lo convierte al modelo tipado."""
    dc = _req(doc, "dc", "tablas")
    ac = _req(doc, "ac", "tablas")
    cond = _req(doc, "conductores", "tablas")
    sus = _req(doc, "suscripcion", "tablas")
    mar = _req(doc, "margenes", "tablas")

    niveles = _req(sus, "niveles_kva", "suscripcion")
    base_zona = _req(mar, "base_por_zona_mm", "margenes")
    ajustes = mar.get("ajuste_lateral_por_techo_mm") or {}

    zonas = {int(z): int(v) for z, v in base_zona.items()}
    faltan = [z for z in range(1, 6) if z not in zonas]
    if faltan:
        raise ValueError(f"margenes.base_por_zona_mm sin zonas {faltan}")

    return TablasElectricas(
        factor_seguridad_isc=_req_num(dc, "factor_seguridad_isc", "dc"),
        umbral_strings_fusible_gpv=int(_req_num(dc, "umbral_strings_fusible_gpv", "dc")),
        factor_fusible_gpv=_req_num(dc, "factor_fusible_gpv", "dc"),
        t_stc_c=float(dc.get("t_stc_c", 25.0)),
        vmax_dc_default_v=_por_fase(dc, "vmax_dc_default_v", "dc"),
        vmin_mppt_default_v=_req_num(dc, "vmin_mppt_default_v", "dc"),
        clima_default_c=(
            _req_num(_req(dc, "clima_default", "dc"), "temp_min_c", "dc.clima_default"),
            _req_num(_req(dc, "clima_default", "dc"), "temp_max_c", "dc.clima_default"),
        ),
        tension_nominal_v=_por_fase(ac, "tension_nominal_v", "ac"),
        escalera_disyuntores_a=_escalera(_req(ac, "escalera_disyuntores_a", "ac"), "ac.escalera_disyuntores_a"),
        tipo_diferencial=_solo_lectura({str(k): str(v) for k, v in _req(ac, "tipo_diferencial", "ac").items()}),
        resistividad_ohm_mm2_m=_req_num(cond, "resistividad_ohm_mm2_m", "conductores"),
        objetivo_caida_pct=_req_num(cond, "objetivo_caida_pct", "conductores"),
        niveles_kva=_solo_lectura({
            fase: _escalera(_req(niveles, fase, "suscripcion.niveles_kva"), f"suscripcion.niveles_kva.{fase}")
            for fase in ("Mono", "Tri")
        }),
        factor_holgura=_req_num(sus, "factor_holgura", "suscripcion"),
        kva_por_amperio_agcp=_por_fase(sus, "kva_por_amperio_agcp", "suscripcion"),
        base_por_zona_mm=_solo_lectura(zonas),
        ajuste_lateral_por_techo_mm=_solo_lectura({str(k): int(v) for k, v in ajustes.items()}),
    )


def _fusionar(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = _fusionar(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def cargar_documento(path: Optional[Path] = None) -> Dict[str, Any]:
    return _leer_yaml(Path(path) if path is not None else ARCHIVO_TABLAS)


def cargar_tablas(path: Optional[Path] = None) -> TablasElectricas:
    doc = cargar_documento(path)
    logger.debug("Tablas eléctricas cargadas desde %s", path or ARCHIVO_TABLAS)
    return tablas_desde_dict(doc)


def construir_tablas_efectivas(
    overrides: Optional[Mapping[str, Any]],
    *,
    path: Optional[Path] = None,
) -> TablasElectricas:
    """
    Tablas base + overrides por sección, ej:
        {"ac": {"escalera_disyuntores_a": [6, 10, 13]}}
    """
    doc = cargar_documento(path)
    if not overrides:
        return tablas_desde_dict(doc)
    desconocidas = [k for k in overrides if k not in _SECCIONES]
    if desconocidas:
        raise ValueError(f"Secciones de override desconocidas: {desconocidas}")
    return tablas_desde_dict(_fusionar(doc, overrides))


_TABLAS_DEFAULT: Optional[TablasElectricas] = None


def tablas_por_defecto() -> TablasElectricas:
    global _TABLAS_DEFAULT
    if _TABLAS_DEFAULT is None:
        _TABLAS_DEFAULT = cargar_tablas()
    return _TABLAS_DEFAULT


__all__ = [
    "CONFIG_DIR",
    "ARCHIVO_TABLAS",
    "TablasElectricas",
    "tablas_desde_dict",
    "cargar_documento",
    "cargar_tablas",
    "construir_tablas_efectivas",
    "tablas_por_defecto",
]
