import json
import tempfile
import unittest
from pathlib import Path

from oj_match.registry import RegistryError, load_entries, load_registry


class TestLoadEntries(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> Path:
        path = self.tmp / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_json_records(self) -> None:
        path = self._write(
            "ojs1g.json",
            json.dumps(
                [
                    {"ds_orgao_julgador": "DAM - Jundiaí", "id": 1},
                    {"ds_orgao_julgador": "LIQ2 - Jundiaí", "id": 2},
                    {"id": 3},
                ],
                ensure_ascii=False,
            ),
        )
        with self.assertLogs("oj_match.registry", level="WARNING") as logs:
            names = load_registry(path)
        self.assertEqual(names, ["DAM - Jundiaí", "LIQ2 - Jundiaí"])
        self.assertIn("Skipping entry 2", logs.output[0])

    def test_json_strings(self) -> None:
        path = self._write("names.json", json.dumps(["DAM - Jundiaí", "Franca"]))
        self.assertEqual(load_entries(path), ["DAM - Jundiaí", "Franca"])

    def test_custom_name_field(self) -> None:
        path = self._write("units.json", json.dumps([{"nome": "Franca"}]))
        self.assertEqual(load_entries(path, name_field="nome"), ["Franca"])

    def test_yaml(self) -> None:
        path = self._write("units.yaml", "- DAM - Jundiaí\n- ds_orgao_julgador: Franca\n")
        self.assertEqual(load_entries(path), ["DAM - Jundiaí", "Franca"])

    def test_text_skips_blank_and_comments(self) -> None:
        path = self._write("units.txt", "# configured units\nDAM Jundiai\n\n  Franca  \n")
        self.assertEqual(load_entries(path), ["DAM Jundiai", "Franca"])

    def test_empty_yaml(self) -> None:
        path = self._write("empty.yaml", "")
        self.assertEqual(load_entries(path), [])

    def test_malformed_json(self) -> None:
        path = self._write("broken.json", "[\"DAM\",")
        with self.assertRaises(RegistryError):
            load_entries(path)

    def test_not_a_list(self) -> None:
        path = self._write("object.json", json.dumps({"ds_orgao_julgador": "DAM"}))
        with self.assertRaises(RegistryError):
            load_entries(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(RegistryError):
            load_entries(self.tmp / "missing.json")


if __name__ == "__main__":
    unittest.main()
