# core/validacion.py
from __future__ import annotations

from electrical.errores import InvalidConfiguration, requerir_positivo

from .modelo import ProjectConfig


def validar_proyecto(p: ProjectConfig) -> None:
    if int(p.panel_count) <= 0:
        raise InvalidConfiguration("panel_count", f"debe ser > 0. Valor={p.panel_count!r}")
    requerir_positivo("panel.power_w", p.panel.power_w)

    if p.inverter.max_ac_power_w is None or float(p.inverter.max_ac_power_w) < 0:
        raise InvalidConfiguration("inverter.max_ac_power_w", f"debe ser >= 0. Valor={p.inverter.max_ac_power_w!r}")

    requerir_positivo("ac_cable_length_m", p.ac_cable_length_m)
    requerir_positivo("ac_cable_section_mm2", p.ac_cable_section_mm2)

    if p.micro_branches:
        if p.micro_power_va is None:
            raise InvalidConfiguration("micro_power_va", "requerido cuando hay ramales de micro-inversores.")
        requerir_positivo("micro_power_va", p.micro_power_va)
        if int(p.panels_per_micro) <= 0:
            raise InvalidConfiguration("panels_per_micro", f"debe ser > 0. Valor={p.panels_per_micro!r}")

    if not p.strings and not p.micro_branches:
        raise InvalidConfiguration("strings", "el proyecto no tiene strings DC ni ramales de micro-inversores.")
