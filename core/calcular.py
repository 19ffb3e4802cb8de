# calcular.py
from __future__ import annotations

import logging

from electrical.modelos import (
    ClimateData,
    ConfiguredString,
    InverterLimits,
    InverterTechnology,
    PanelElectricalSpec,
    Phase,
    RoofType,
    WindZone,
)

from .modelo import ProjectConfig
from .orquestador import evaluate_project

logger = logging.getLogger(__name__)


def proyecto_ejemplo() -> ProjectConfig:
    panel = PanelElectricalSpec(
        voc_stc_v=45.6,
        vmp_stc_v=37.9,
        isc_stc_a=13.9,
        temp_coeff_voc_pct_c=-0.27,
        temp_coeff_vmp_pct_c=-0.35,
        power_w=500.0,
    )
    inversor = InverterLimits(
        max_ac_power_w=6000.0,
        phase=Phase.MONO,
        vmax_dc_v=600.0,
        vmin_mppt_v=80.0,
        technology=InverterTechnology.STRING,
    )
    return ProjectConfig(
        panel=panel,
        inverter=inversor,
        panel_count=14,
        ac_cable_length_m=18.0,
        ac_cable_section_mm2=6.0,
        roof_type=RoofType.TUILE_CANAL,
        wind_zone=WindZone.ZONE_3,
        strings=(ConfiguredString(panel_count=7, mppt_index=1), ConfiguredString(panel_count=7, mppt_index=2)),
        agcp_a=45.0,
    )


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    resultado = evaluate_project(proyecto_ejemplo(), ClimateData(temp_min_c=-10.0, temp_max_c=70.0))
    d = resultado.compatibility.details

    logger.info("Voc frío %.1f V / Vdc_max %.0f V | Vmp caliente %.1f V", d.voc_cold_v, d.vmax_inverter_v, d.vmp_hot_v)
    logger.info("In AC %.2f A | disyuntor %s A | DDR tipo %s", d.nominal_ac_current_a, d.recommended_breaker_a, d.rcd_type)
    logger.info("Caída de tensión AC %.2f %%", resultado.compatibility.feeder_drop.drop_pct)
    logger.info("Suscripción: %s (recomendado %s kVA)", resultado.subscription.state, resultado.subscription.recommended_kva)
    logger.info("Márgenes: %s", resultado.margins)
    for w in resultado.warnings:
        logger.info("⚠ %s", w.message)


if __name__ == "__main__":
    main()
