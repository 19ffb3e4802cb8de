# electrical/suscripcion.py
"""
Suscripción (abonnement) vs potencia FV instalada.

- Nivel recomendado: menor nivel estándar >= kWc instalados × factor de holgura.
  None si la potencia supera el nivel máximo de la fase (12 kVA mono / 36 kVA tri).
- Suscripción declarada: en kVA, o derivada del calibre AGCP (A) × kVA/A por fase.
- Tres estados: OK / INSUFFICIENT / UNKNOWN. Sin dato declarado el estado es
  UNKNOWN (is_ok=False) y NO equivale a una suscripción insuficiente.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.errores import requerir_no_negativo
from electrical.modelos import Phase, ReportWarning, SubscriptionStatus, WarningKind

logger = logging.getLogger(__name__)

ESTADO_OK = "OK"
ESTADO_INSUFICIENTE = "INSUFFICIENT"
ESTADO_DESCONOCIDO = "UNKNOWN"


def nivel_recomendado(potencia_kw: float, *, niveles: Sequence[float], holgura: float = 1.0) -> Optional[float]:
    objetivo = float(potencia_kw) * float(holgura)
    for n in sorted(niveles):
        if float(n) >= objetivo:
            return float(n)
    return None


def kva_desde_agcp(agcp_a: Optional[float], phase: Phase, *, tablas: TablasElectricas) -> Optional[float]:
    """Calibre AGCP (A) -> kVA suscritos. None / <= 0 => desconocido."""
    if agcp_a is None:
        return None
    a = float(agcp_a)
    if a <= 0.0:
        return None
    return round(a * float(tablas.kva_por_amperio_agcp[phase.value]), 3)


def subscription_status(
    *,
    installed_kwc: float,
    phase: Phase,
    subscribed_kva: Optional[float] = None,
    agcp_a: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> SubscriptionStatus:
    tablas = tablas or tablas_por_defecto()
    kwc = requerir_no_negativo("installed_kwc", installed_kwc)

    recomendado = nivel_recomendado(kwc, niveles=tablas.niveles_kva[phase.value], holgura=tablas.factor_holgura)
    if recomendado is None:
        logger.warning("%.2f kWc supera el nivel máximo de suscripción %s.", kwc, phase.value)

    suscrito: Optional[float]
    if subscribed_kva is not None and float(subscribed_kva) > 0.0:
        suscrito = float(subscribed_kva)
    else:
        suscrito = kva_desde_agcp(agcp_a, phase, tablas=tablas)

    warnings: List[ReportWarning] = []
    if suscrito is None:
        estado = ESTADO_DESCONOCIDO
        is_ok = False
        warnings.append(
            ReportWarning(
                kind=WarningKind.SUBSCRIPTION_UNKNOWN,
                message="Potencia suscrita no informada (AGCP): verificar con el proveedor/gestor de red.",
                limit=recomendado,
            )
        )
    else:
        is_ok = recomendado is not None and suscrito >= recomendado
        estado = ESTADO_OK if is_ok else ESTADO_INSUFICIENTE
        if not is_ok:
            warnings.append(
                ReportWarning(
                    kind=WarningKind.SUBSCRIPTION_INSUFFICIENT,
                    message=f"Suscripción {suscrito:g} kVA insuficiente (recomendado {recomendado} kVA).",
                    value=suscrito,
                    limit=recomendado,
                )
            )

    logger.debug("Suscripción: %.2f kWc %s => recomendado %s kVA, suscrito %s kVA (%s)",
                 kwc, phase.value, recomendado, suscrito, estado)

    return SubscriptionStatus(
        recommended_kva=recomendado,
        subscribed_kva=suscrito,
        is_ok=is_ok,
        phase=phase,
        state=estado,
        warnings=tuple(warnings),
    )


__all__ = [
    "ESTADO_OK",
    "ESTADO_INSUFICIENTE",
    "ESTADO_DESCONOCIDO",
    "nivel_recomendado",
    "kva_desde_agcp",
    "subscription_status",
]
