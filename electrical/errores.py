"""
Errores del motor de cumplimiento eléctrico.

Sólo las configuraciones inválidas son excepciones. Los riesgos calculados
(Voc frío sobre Vdc_max, caída de tensión alta, fusibles gPV) viajan como
datos en los reportes (ver `ReportWarning` en electrical.modelos).
"""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Entrada rechazada en la frontera del motor (conteos <= 0, campos faltantes)."""

    def __init__(self, campo: str, mensaje: str) -> None:
        super().__init__(f"{campo}: {mensaje}")
        self.campo = campo
        self.mensaje = mensaje


def requerir_positivo(campo: str, valor: float | int | None) -> float:
    if valor is None:
        raise InvalidConfiguration(campo, "valor requerido.")
    try:
        x = float(valor)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(campo, f"debe ser numérico. Valor={valor!r}") from e
    if not x > 0.0:
        raise InvalidConfiguration(campo, f"debe ser > 0. Valor={valor!r}")
    return x


def requerir_no_negativo(campo: str, valor: float | int | None) -> float:
    if valor is None:
        raise InvalidConfiguration(campo, "valor requerido.")
    try:
        x = float(valor)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(campo, f"debe ser numérico. Valor={valor!r}") from e
    if x < 0.0:
        raise InvalidConfiguration(campo, f"no puede ser negativo. Valor={valor!r}")
    return x


__all__ = ["InvalidConfiguration", "requerir_positivo", "requerir_no_negativo"]
