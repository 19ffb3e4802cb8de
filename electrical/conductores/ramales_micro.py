# Ramales de micro-inversores: corriente, caída de tensión por ramal y caída "producción" acumulada.
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from core.configuracion import TablasElectricas, tablas_por_defecto
from electrical.errores import InvalidConfiguration, requerir_no_negativo, requerir_positivo
from electrical.modelos import (
    MicroBranch,
    MicroBranchesReport,
    MicroBranchInput,
    ReportWarning,
    WarningKind,
)

from .caida_tension import voltage_drop

logger = logging.getLogger(__name__)


# I_ramal = n_micros × P_micro / U
def corriente_ramal(*, micro_count: int, micro_power_va: float, voltage_v: float) -> float:
    return float(micro_count) * float(micro_power_va) / float(voltage_v)


# Estado de aprovisionamiento: micros configurados vs requeridos.
def aprovisionamiento(*, required: int, configured: int) -> str:
    if configured < required:
        return "UNDER"
    if configured > required:
        return "OVER"
    return "OK"


def _ramal(b: MicroBranchInput, *, micro_power_va: float, tablas: TablasElectricas) -> MicroBranch:
    try:
        n = int(b.micro_count)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"branch[{b.branch_id}].micro_count", f"debe ser entero. Valor={b.micro_count!r}") from e
    if n < 0:
        raise InvalidConfiguration(f"branch[{b.branch_id}].micro_count", f"no puede ser negativo. Valor={n}")

    u = float(tablas.tension_nominal_v[b.phase.value])
    i = corriente_ramal(micro_count=n, micro_power_va=micro_power_va, voltage_v=u)
    vd = voltage_drop(
        current_a=i,
        length_m=b.cable_length_m,
        section_mm2=b.cable_section_mm2,
        phase=b.phase,
        voltage_v=u,
        tablas=tablas,
    )
    return MicroBranch(
        branch_id=str(b.branch_id),
        name=str(b.name),
        phase=b.phase,
        micro_count=n,
        cable_length_m=vd.length_m,
        cable_section_mm2=vd.section_mm2,
        current_a=i,
        drop_v=vd.drop_v,
        drop_pct=vd.drop_pct,
        exceeds_target=vd.exceeds_target,
    )


def analyze_micro_branches(
    branches: Sequence[MicroBranchInput],
    *,
    micro_power_va: float,
    required_micros: int,
    feeder_drop_pct: Optional[float] = None,
    tablas: Optional[TablasElectricas] = None,
) -> MicroBranchesReport:
    """
    Calcula cada ramal por separado y la caída "producción" acumulada:

        production_drop_pct = max(drop_pct de ramales) + drop_pct de la liaison principal

    (peor caso desde el micro más lejano hasta el punto de conexión). Sin ramales,
    la caída de producción es sólo la de la liaison.
    """
    tablas = tablas or tablas_por_defecto()
    p_micro = requerir_positivo("micro_power_va", micro_power_va)
    requeridos = int(requerir_no_negativo("required_micros", required_micros))
    feeder = float(requerir_no_negativo("feeder_drop_pct", feeder_drop_pct)) if feeder_drop_pct is not None else 0.0

    ramales = tuple(_ramal(b, micro_power_va=p_micro, tablas=tablas) for b in branches)
    peor = max((r.drop_pct for r in ramales), default=0.0)
    produccion = peor + feeder
    configurados = sum(r.micro_count for r in ramales)
    estado = aprovisionamiento(required=requeridos, configured=configurados)
    excede = produccion > tablas.objetivo_caida_pct

    warnings: List[ReportWarning] = []
    if excede:
        warnings.append(
            ReportWarning(
                kind=WarningKind.VOLTAGE_DROP_ABOVE_TARGET,
                message=f"Caída de tensión producción {produccion:.2f} % > objetivo {tablas.objetivo_caida_pct:.2f} %.",
                value=produccion,
                limit=tablas.objetivo_caida_pct,
            )
        )
    if estado == "UNDER":
        warnings.append(
            ReportWarning(
                kind=WarningKind.MICRO_UNDER_PROVISIONED,
                message=f"Micros configurados {configurados} < requeridos {requeridos}.",
                value=float(configurados),
                limit=float(requeridos),
            )
        )
    elif estado == "OVER":
        warnings.append(
            ReportWarning(
                kind=WarningKind.MICRO_OVER_PROVISIONED,
                message=f"Micros configurados {configurados} > requeridos {requeridos}.",
                value=float(configurados),
                limit=float(requeridos),
            )
        )

    for w in warnings:
        logger.warning("Ramales micro: %s", w.message)

    return MicroBranchesReport(
        required_micros=requeridos,
        total_micros_configured=configurados,
        micro_power_va=p_micro,
        branches=ramales,
        worst_branch_drop_pct=peor,
        feeder_drop_pct=feeder,
        production_drop_pct=produccion,
        provisioning=estado,
        exceeds_target=excede,
        warnings=tuple(warnings),
    )


__all__ = ["corriente_ramal", "aprovisionamiento", "analyze_micro_branches"]
