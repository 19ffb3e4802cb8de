# electrical/margenes.py
from __future__ import annotations

from typing import Optional

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.modelos import Margins, RoofType, WindZone


def margen_base_mm(wind_zone: WindZone, *, tablas: TablasElectricas) -> int:
    # Zona de borde (rive): más viento => más distancia al borde
    return int(tablas.base_por_zona_mm[int(wind_zone)])


def recommended_margins(
    roof_type: RoofType,
    wind_zone: WindZone,
    *,
    tablas: Optional[TablasElectricas] = None,
) -> Margins:
    """
    Márgenes de implantación (mm). El ajuste por tipo de techo sólo aplica a los
    laterales (levantamiento en bordes); arriba/abajo quedan en el margen base.
    """
    tablas = tablas or tablas_por_defecto()
    base = margen_base_mm(wind_zone, tablas=tablas)
    lateral = base + int(tablas.ajuste_lateral_por_techo_mm.get(roof_type.value, 0))
    return Margins(top=base, bottom=base, left=lateral, right=lateral)


__all__ = ["margen_base_mm", "recommended_margins"]
