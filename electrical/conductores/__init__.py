"""
Dominio conductores — FV Engine

API pública del módulo:
- Caída de tensión (liaison principal AC)
- Ramales de micro-inversores y caída "producción" acumulada

Regla arquitectónica:
Otros módulos NO deben importar archivos internos.
Siempre importar desde:
    electrical.conductores
"""

from .caida_tension import caida_tension_v, coeficiente_b, feeder_voltage_drop, voltage_drop
from .ramales_micro import analyze_micro_branches, aprovisionamiento, corriente_ramal

__all__ = [
    "voltage_drop",
    "feeder_voltage_drop",
    "caida_tension_v",
    "coeficiente_b",
    "analyze_micro_branches",
    "corriente_ramal",
    "aprovisionamiento",
]
