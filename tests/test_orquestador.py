import unittest
from dataclasses import replace
from unittest import mock

from core.modelo import ProjectConfig
from core.orquestador import build_compatibility_report, build_micro_branches_report, evaluate_project
from core.validacion import validar_proyecto
from electrical.errores import InvalidConfiguration
from electrical.modelos import (
    ClimateData,
    ConfiguredString,
    InverterLimits,
    InverterTechnology,
    MicroBranchInput,
    PanelElectricalSpec,
    Phase,
    RoofType,
    WarningKind,
    WindZone,
)
from electrical.protecciones import seguridad_dc

PANEL = PanelElectricalSpec(
    voc_stc_v=45.6,
    vmp_stc_v=38.0,
    isc_stc_a=13.9,
    temp_coeff_voc_pct_c=-0.27,
    temp_coeff_vmp_pct_c=-0.35,
    power_w=500.0,
)
CLIMA = ClimateData(temp_min_c=-10.0, temp_max_c=70.0)


class TestOrquestador(unittest.TestCase):
    def _proyecto_string(self, **kw) -> ProjectConfig:
        base = dict(
            panel=PANEL,
            inverter=InverterLimits(max_ac_power_w=6000.0, phase=Phase.MONO, vmax_dc_v=600.0, vmin_mppt_v=80.0),
            panel_count=14,
            ac_cable_length_m=10.0,
            ac_cable_section_mm2=10.0,
            roof_type=RoofType.FIBROCIMENT,
            wind_zone=WindZone.ZONE_5,
            strings=(ConfiguredString(panel_count=7, mppt_index=1), ConfiguredString(panel_count=7, mppt_index=2)),
            subscribed_kva=9.0,
        )
        base.update(kw)
        return ProjectConfig(**base)

    def _proyecto_micro(self, **kw) -> ProjectConfig:
        base = dict(
            panel=PANEL,
            inverter=InverterLimits(
                max_ac_power_w=4800.0,
                phase=Phase.MONO,
                technology=InverterTechnology.MICRO,
            ),
            panel_count=12,
            ac_cable_length_m=15.0,
            ac_cable_section_mm2=6.0,
            micro_branches=(
                MicroBranchInput("A", "Ramal A", Phase.MONO, 8, 20.0, 2.5),
                MicroBranchInput("B", "Ramal B", Phase.MONO, 4, 10.0, 2.5),
            ),
            micro_power_va=400.0,
        )
        base.update(kw)
        return ProjectConfig(**base)

    def test_evaluacion_string_completa(self):
        res = evaluate_project(self._proyecto_string(), CLIMA)
        d = res.compatibility.details

        self.assertEqual(2, d.mppt_count)
        self.assertEqual(7, d.max_panels_in_string)
        self.assertAlmostEqual(45.6 * (1 + (-0.27 / 100) * (-35)) * 7, d.voc_cold_v)
        self.assertAlmostEqual(7000.0 / 6000.0, d.dc_ac_ratio)
        self.assertEqual(600.0, d.vmax_inverter_v)
        self.assertEqual(80.0, d.vmin_mppt_v)
        self.assertAlmostEqual(13.9, d.isc_panel_a)
        self.assertAlmostEqual(13.9 * 1.25, d.isc_calculation_a)
        self.assertAlmostEqual(6000.0 / 230.0, d.nominal_ac_current_a)
        self.assertEqual(32, d.recommended_breaker_a)
        self.assertEqual("A", d.rcd_type)
        self.assertEqual(6000.0, d.max_ac_power_w)
        self.assertEqual(2, len(d.strings_analysis))

        self.assertIsNotNone(res.compatibility.dc_safety)
        self.assertFalse(res.compatibility.dc_safety.gpv_fuse_required)
        self.assertIsNone(res.micro_branches)
        self.assertTrue(res.subscription.is_ok)
        self.assertEqual((600, 600, 700, 700), (res.margins.top, res.margins.bottom, res.margins.left, res.margins.right))

    def test_caida_liaison_en_reporte(self):
        res = evaluate_project(self._proyecto_string(ac_cable_length_m=40.0, ac_cable_section_mm2=4.0), CLIMA)
        self.assertTrue(res.compatibility.feeder_drop.exceeds_target)
        self.assertIn(WarningKind.VOLTAGE_DROP_ABOVE_TARGET, [w.kind for w in res.compatibility.warnings])
        self.assertTrue(res.compatibility.has_warnings)

    def test_voc_excedido_reporte_completo(self):
        p = self._proyecto_string(
            panel_count=28,
            strings=(ConfiguredString(panel_count=14, mppt_index=1), ConfiguredString(panel_count=14, mppt_index=2)),
        )
        res = evaluate_project(p, CLIMA)
        self.assertTrue(res.compatibility.dc_safety.voltage_exceeded)
        self.assertIn(WarningKind.VOLTAGE_EXCEEDED, [w.kind for w in res.warnings])
        self.assertEqual(32, res.compatibility.details.recommended_breaker_a)

    def test_proyecto_micro(self):
        res = evaluate_project(self._proyecto_micro(), CLIMA)
        d = res.compatibility.details
        self.assertIsNone(d.voc_cold_v)
        self.assertIsNone(d.vmp_hot_v)
        self.assertEqual(0, d.mppt_count)
        self.assertEqual((), d.strings_analysis)
        self.assertIsNone(res.compatibility.dc_safety)

        micro = res.micro_branches
        self.assertIsNotNone(micro)
        self.assertEqual(12, micro.required_micros)
        self.assertEqual(12, micro.total_micros_configured)
        self.assertAlmostEqual(
            micro.worst_branch_drop_pct + res.compatibility.feeder_drop.drop_pct,
            micro.production_drop_pct,
        )
        self.assertEqual(micro.feeder_drop_pct, res.compatibility.feeder_drop.drop_pct)

    def test_micros_requeridos_por_paneles_por_micro(self):
        rep = build_micro_branches_report(self._proyecto_micro(panel_count=24, panels_per_micro=2))
        self.assertEqual(12, rep.required_micros)
        self.assertEqual("OK", rep.provisioning)

    def test_clima_ausente_usa_defaults(self):
        with self.assertLogs("core.orquestador", level="WARNING"):
            sin_clima = build_compatibility_report(self._proyecto_string())
        con_clima = build_compatibility_report(self._proyecto_string(), CLIMA)
        self.assertEqual(con_clima.details.voc_cold_v, sin_clima.details.voc_cold_v)

    def test_proyecto_micro_sin_aviso_de_limites_dc(self):
        with mock.patch.object(seguridad_dc.logger, "warning") as aviso:
            res = evaluate_project(self._proyecto_micro(), CLIMA)
        aviso.assert_not_called()
        self.assertEqual(600.0, res.compatibility.details.vmax_inverter_v)
        self.assertEqual(80.0, res.compatibility.details.vmin_mppt_v)

    def test_corriente_sobre_escalera_es_warning(self):
        p = self._proyecto_string(
            inverter=InverterLimits(max_ac_power_w=40000.0, phase=Phase.MONO, vmax_dc_v=600.0, vmin_mppt_v=80.0),
        )
        res = build_compatibility_report(p, CLIMA)
        self.assertIsNone(res.details.recommended_breaker_a)
        w = [w for w in res.warnings if w.kind == WarningKind.BREAKER_ABOVE_LADDER]
        self.assertEqual(1, len(w))
        self.assertAlmostEqual(40000.0 / 230.0, w[0].value)
        self.assertEqual(125.0, w[0].limit)

    def test_determinismo(self):
        a = evaluate_project(self._proyecto_micro(), CLIMA)
        b = evaluate_project(self._proyecto_micro(), CLIMA)
        self.assertEqual(a, b)
        c = evaluate_project(self._proyecto_string(), CLIMA)
        d = evaluate_project(self._proyecto_string(), CLIMA)
        self.assertEqual(c, d)

    def test_validacion(self):
        with self.assertRaises(InvalidConfiguration):
            validar_proyecto(self._proyecto_string(strings=()))
        with self.assertRaises(InvalidConfiguration):
            validar_proyecto(self._proyecto_string(panel_count=0))
        with self.assertRaises(InvalidConfiguration):
            validar_proyecto(self._proyecto_micro(micro_power_va=None))
        with self.assertRaises(InvalidConfiguration):
            validar_proyecto(self._proyecto_string(ac_cable_section_mm2=0.0))

    def test_suscripcion_desconocida(self):
        res = evaluate_project(replace(self._proyecto_string(), subscribed_kva=None), CLIMA)
        self.assertEqual("UNKNOWN", res.subscription.state)
        self.assertFalse(res.subscription.is_ok)


if __name__ == "__main__":
    unittest.main()
