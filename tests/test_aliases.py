import unittest

from oj_match.core.resolution.aliases import DEFAULT_ALIASES, apply_aliases
from oj_match.core.resolution.normalizer import normalize


class TestApplyAliases(unittest.TestCase):
    def test_unit_abbreviations(self):
        self.assertEqual(apply_aliases(normalize("VT Franca")), "vara do trabalho franca")
        self.assertEqual(apply_aliases(normalize("V.T. de Franca")), "vara do trabalho de franca")
        self.assertEqual(
            apply_aliases(normalize("DIVEX Limeira")), "divisao de execucao - limeira"
        )
        self.assertEqual(apply_aliases(normalize("CCP Franca")), "cejusc - franca")

    def test_city_abbreviations(self):
        self.assertEqual(
            apply_aliases(normalize("1ª Vara do Trabalho de S. José dos Campos")),
            "1ª vara do trabalho de sao jose dos campos",
        )
        self.assertEqual(apply_aliases(normalize("Rib. Preto")), "ribeirao preto")
        self.assertEqual(apply_aliases(normalize("Pres. Prudente")), "presidente prudente")

    def test_longest_variant_wins(self):
        self.assertEqual(
            apply_aliases("s bernardo do campo"), "sao bernardo do campo"
        )
        self.assertEqual(apply_aliases("s bernardo"), "sao bernardo do campo")

    def test_whole_words_only(self):
        self.assertEqual(apply_aliases("vtx franca"), "vtx franca")
        self.assertEqual(apply_aliases("1ª vara do trabalho de franca"), "1ª vara do trabalho de franca")

    def test_expansion_is_not_reapplied(self):
        self.assertEqual(apply_aliases("x"), "x")
        self.assertEqual(apply_aliases("vt", {"vt": "vt vt"}), "vt vt")

    def test_custom_table(self):
        table = {"juiz. esp.": "Juizado Especial"}
        self.assertEqual(apply_aliases("juiz. esp. de franca", table), "juizado especial de franca")

    def test_empty_inputs(self):
        self.assertEqual(apply_aliases(""), "")
        self.assertEqual(apply_aliases("vt franca", None), "vt franca")
        self.assertEqual(apply_aliases("vt franca", {}), "vt franca")
        self.assertEqual(apply_aliases("vt franca", {"": "x"}), "vt franca")

    def test_default_table_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_ALIASES["vt"] = "x"


if __name__ == "__main__":
    unittest.main()
