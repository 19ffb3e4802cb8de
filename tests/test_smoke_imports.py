import importlib
import unittest


class TestSmokeImports(unittest.TestCase):
    def test_import_modulos_criticos(self):
        for nombre in (
            "core.configuracion",
            "core.orquestador",
            "core.calcular",
            "electrical.paneles",
            "electrical.protecciones",
            "electrical.conductores",
            "electrical.suscripcion",
            "electrical.margenes",
        ):
            with self.subTest(modulo=nombre):
                self.assertIsNotNone(importlib.import_module(nombre))

    def test_proyecto_ejemplo_se_evalua(self):
        from core.calcular import proyecto_ejemplo
        from core.orquestador import evaluate_project

        res = evaluate_project(proyecto_ejemplo())
        self.assertEqual(2, res.compatibility.details.mppt_count)
        self.assertEqual("OK", res.subscription.state)

    def test_errores_referencia_registro_de_warnings(self):
        errores = importlib.import_module("electrical.errores")
        modelos = importlib.import_module("electrical.modelos")
        self.assertIn("ReportWarning", errores.__doc__)
        self.assertTrue(hasattr(modelos, "ReportWarning"))


if __name__ == "__main__":
    unittest.main()
