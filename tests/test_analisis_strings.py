import unittest

from electrical.errores import InvalidConfiguration
from electrical.modelos import ClimateData, ConfiguredString, PanelElectricalSpec
from electrical.paneles import analyze_strings, contar_strings_por_mppt, voc_frio_panel


def _panel(**kw) -> PanelElectricalSpec:
    base = dict(
        voc_stc_v=45.6,
        vmp_stc_v=38.0,
        isc_stc_a=13.9,
        temp_coeff_voc_pct_c=-0.27,
        temp_coeff_vmp_pct_c=-0.35,
        power_w=500.0,
    )
    base.update(kw)
    return PanelElectricalSpec(**base)


CLIMA = ClimateData(temp_min_c=-10.0, temp_max_c=70.0)


class TestAnalisisStrings(unittest.TestCase):
    def test_voc_frio_caso_referencia(self):
        res = analyze_strings([ConfiguredString(panel_count=10, mppt_index=1)], _panel(), CLIMA)
        esperado = 45.6 * (1 + (-0.27 / 100) * (-10 - 25)) * 10
        self.assertAlmostEqual(esperado, res.voc_cold_v, places=9)
        self.assertAlmostEqual(499.092, res.voc_cold_v, places=3)

    def test_vmp_caliente(self):
        res = analyze_strings([ConfiguredString(panel_count=10, mppt_index=1)], _panel(), CLIMA)
        self.assertAlmostEqual(38.0 * (1 + (-0.35 / 100) * (70 - 25)) * 10, res.vmp_hot_v, places=9)

    def test_isc_calculo_no_depende_de_n_paneles(self):
        a = analyze_strings([ConfiguredString(panel_count=6, mppt_index=1)], _panel(), CLIMA)
        b = analyze_strings([ConfiguredString(panel_count=14, mppt_index=1)], _panel(), CLIMA)
        self.assertAlmostEqual(13.9 * 1.25, a.isc_calculation_a)
        self.assertEqual(a.isc_calculation_a, b.isc_calculation_a)
        self.assertEqual(a.strings[0].isc_calculation_a, b.strings[0].isc_calculation_a)

    def test_mppt_count_es_n_indices_distintos(self):
        strings = [
            ConfiguredString(panel_count=10, mppt_index=1),
            ConfiguredString(panel_count=10, mppt_index=1),
            ConfiguredString(panel_count=8, mppt_index=3),
        ]
        res = analyze_strings(strings, _panel(), CLIMA)
        self.assertEqual(2, res.mppt_count)
        self.assertEqual([1, 3], [s.mppt_index for s in res.strings])
        self.assertEqual("2×10", res.strings[0].composition)
        self.assertEqual(20, res.strings[0].total_panel_count)
        self.assertEqual("1×8", res.strings[1].composition)
        self.assertEqual(((1, 2), (3, 1)), res.parallel_counts)
        self.assertEqual(28, res.total_panel_count)
        self.assertEqual(10, res.max_panels_in_string)

    def test_peor_caso_es_el_maximo(self):
        strings = [ConfiguredString(panel_count=8, mppt_index=1), ConfiguredString(panel_count=12, mppt_index=2)]
        res = analyze_strings(strings, _panel(), CLIMA)
        self.assertEqual(max(s.voc_cold_v for s in res.strings), res.voc_cold_v)
        self.assertEqual(max(s.vmp_hot_v for s in res.strings), res.vmp_hot_v)
        self.assertEqual(res.strings[1].voc_cold_v, res.voc_cold_v)

    def test_composicion_strings_desiguales(self):
        strings = [ConfiguredString(panel_count=10, mppt_index=1), ConfiguredString(panel_count=8, mppt_index=1)]
        res = analyze_strings(strings, _panel(), CLIMA)
        self.assertEqual("10+8", res.strings[0].composition)
        # strings en paralelo: manda el más largo
        self.assertAlmostEqual(voc_frio_panel(voc_stc=45.6, coef_voc_pct_c=-0.27, t_min_c=-10.0) * 10,
                               res.strings[0].voc_cold_v)

    def test_mppt_ausente_se_trata_como_1(self):
        strings = [ConfiguredString(panel_count=10), ConfiguredString(panel_count=10, mppt_index=0),
                   ConfiguredString(panel_count=10, mppt_index=1)]
        res = analyze_strings(strings, _panel(), CLIMA)
        self.assertEqual(1, res.mppt_count)
        self.assertEqual(3, res.strings[0].string_count)
        self.assertEqual({1: 3}, contar_strings_por_mppt(strings))

    def test_monotonicidad_voc_con_frio(self):
        prev = None
        for t in range(20, -31, -5):
            clima = ClimateData(temp_min_c=float(t), temp_max_c=70.0)
            v = analyze_strings([ConfiguredString(panel_count=10, mppt_index=1)], _panel(), clima).voc_cold_v
            if prev is not None:
                self.assertGreaterEqual(v, prev)
            prev = v

    def test_coeficiente_se_usa_con_signo(self):
        # coeficiente positivo (atípico): el frío BAJA la tensión
        res = analyze_strings([ConfiguredString(panel_count=10, mppt_index=1)],
                              _panel(temp_coeff_voc_pct_c=0.1), CLIMA)
        self.assertLess(res.voc_cold_v, 45.6 * 10)

    def test_rechaza_conteos_invalidos(self):
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([ConfiguredString(panel_count=0, mppt_index=1)], _panel(), CLIMA)
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([ConfiguredString(panel_count=-2, mppt_index=1)], _panel(), CLIMA)
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([ConfiguredString(panel_count=10, mppt_index=-1)], _panel(), CLIMA)
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([], _panel(), CLIMA)

    def test_rechaza_panel_incompleto(self):
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([ConfiguredString(panel_count=10)], _panel(voc_stc_v=0.0), CLIMA)
        with self.assertRaises(InvalidConfiguration):
            analyze_strings([ConfiguredString(panel_count=10)], _panel(temp_coeff_vmp_pct_c=None), CLIMA)

    def test_clima_invalido(self):
        with self.assertRaises(InvalidConfiguration):
            ClimateData(temp_min_c=30.0, temp_max_c=10.0)
        # InvalidConfiguration es ValueError
        with self.assertRaises(ValueError):
            ClimateData(temp_min_c=10.0, temp_max_c=10.0)

    def test_determinismo(self):
        strings = [ConfiguredString(panel_count=9, mppt_index=2), ConfiguredString(panel_count=11, mppt_index=1)]
        a = analyze_strings(strings, _panel(), CLIMA)
        b = analyze_strings(list(strings), _panel(), CLIMA)
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
