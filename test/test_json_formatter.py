"""Tests for JSON rendering: layout options, cycles and special values."""

import json
import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from GhpConnector.formatters import JsonFormatter, format_output
from GhpConnector.formatters.json import prepare_json
from GhpConnector.utils.log import log


class TestJsonLayout(unittest.TestCase):
    def test_default_matches_two_space_indent(self) -> None:
        data = {"id": 123, "name": "Test"}
        self.assertEqual(format_output(data, "json"), json.dumps(data, indent=2))
        self.assertEqual(format_output(data, "json"), '{\n  "id": 123,\n  "name": "Test"\n}')

    def test_compact(self) -> None:
        self.assertEqual(format_output({"id": 123, "name": "Test"}, "json", {"compact": True}), '{"id":123,"name":"Test"}')

    def test_compact_wins_over_pretty_and_indent(self) -> None:
        out = format_output([1, {"a": 2}], "json", {"compact": True, "pretty": True, "indent": 4})
        self.assertEqual(out, '[1,{"a":2}]')

    def test_not_pretty_is_single_line(self) -> None:
        self.assertEqual(format_output({"a": [1, 2]}, "json", {"pretty": False}), '{"a":[1,2]}')

    def test_custom_indent(self) -> None:
        self.assertEqual(format_output({"a": 1}, "json", {"indent": 4}), '{\n    "a": 1\n}')

    def test_key_order_preserved_by_default(self) -> None:
        out = format_output({"b": 1, "a": 2}, "json", {"compact": True})
        self.assertEqual(out, '{"b":1,"a":2}')

    def test_sort_keys_at_every_depth(self) -> None:
        data = {"b": {"z": 1, "a": 2}, "a": [{"d": 1, "c": {"y": 0, "x": 0}}]}
        out = format_output(data, "json", {"sort_keys": True})
        self.assertEqual(out, json.dumps(data, indent=2, sort_keys=True))

    def test_round_trip(self) -> None:
        data = {
            "number": 7,
            "ratio": 0.25,
            "open": True,
            "closed_at": None,
            "labels": [{"name": "bug"}, {"name": "ui"}],
            "nested": {"deep": {"deeper": ["x", 1, False]}},
        }
        self.assertEqual(json.loads(format_output(data, "json")), data)


class TestJsonSafety(unittest.TestCase):
    def test_self_reference(self) -> None:
        data: dict = {"name": "loop"}
        data["self"] = data

        out = format_output(data, "json")

        self.assertIn("[Circular]", out)
        self.assertEqual(json.loads(out), {"name": "loop", "self": "[Circular]"})

    def test_cycle_through_list_element(self) -> None:
        data: dict = {"items": []}
        data["items"].append(data)

        self.assertEqual(json.loads(format_output(data, "json")), {"items": ["[Circular]"]})

    def test_parent_child_back_reference(self) -> None:
        parent: dict = {"name": "parent"}
        child = {"name": "child", "parent": parent}
        parent["child"] = child

        parsed = json.loads(format_output(parent, "json"))

        self.assertEqual(parsed["child"]["name"], "child")
        self.assertEqual(parsed["child"]["parent"], "[Circular]")

    def test_shared_reference_is_not_circular(self) -> None:
        shared = {"x": 1}
        parsed = json.loads(format_output({"a": shared, "b": [shared, shared]}, "json"))
        self.assertEqual(parsed, {"a": {"x": 1}, "b": [{"x": 1}, {"x": 1}]})

    def test_list_containing_itself(self) -> None:
        items: list = [1]
        items.append(items)
        self.assertEqual(json.loads(format_output(items, "json")), [1, "[Circular]"])

    def test_non_finite_numbers_become_null(self) -> None:
        out = format_output({"nan": float("nan"), "inf": float("inf"), "ninf": float("-inf"), "ok": 1.5}, "json")
        self.assertEqual(json.loads(out), {"nan": None, "inf": None, "ninf": None, "ok": 1.5})
        self.assertNotIn("NaN", out)
        self.assertNotIn("Infinity", out)

    def test_special_characters_round_trip(self) -> None:
        text = 'quote " backslash \\ newline \n tab \t bell \x07 accent é emoji 🎉'
        out = format_output({"s": text}, "json")

        self.assertEqual(json.loads(out)["s"], text)
        self.assertIn("é", out)
        self.assertIn("🎉", out)
        self.assertIn("\\n", out)
        self.assertIn("\\u0007", out)

    def test_non_json_values(self) -> None:
        moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        parsed = json.loads(format_output({"t": (1, 2), "when": moment, "path": Path("a")}, "json"))
        self.assertEqual(parsed, {"t": [1, 2], "when": "2024-01-02T03:04:05+00:00", "path": "a"})

    def test_prepare_json_stringifies_keys(self) -> None:
        self.assertEqual(prepare_json({1: "a", "b": 2}, sort_keys=True), {"1": "a", "b": 2})

    def test_colliding_keys_keep_the_first(self) -> None:
        with self.assertLogs(log, level="DEBUG") as logs:
            self.assertEqual(prepare_json({1: "a", "1": "b"}), {"1": "a"})
        self.assertIn("Dropping duplicate JSON key '1'", logs.output[0])
        self.assertEqual(format_output({"1": "x", 1: "y"}, "json", {"compact": True}), '{"1":"x"}')


class TestJsonFormatterInstance(unittest.TestCase):
    def test_supported_formats(self) -> None:
        self.assertEqual(JsonFormatter().supported_formats(), ("json",))

    def test_clone_has_independent_options(self) -> None:
        original = JsonFormatter()
        twin = original.clone()
        twin.configure({"compact": True})

        self.assertFalse(original.options["compact"])
        self.assertTrue(twin.options["compact"])
        self.assertIsInstance(twin, JsonFormatter)

    def test_constructor_options(self) -> None:
        self.assertEqual(JsonFormatter(sort_keys=True, compact=True).format({"b": 1, "a": 2}), '{"a":2,"b":1}')


if __name__ == "__main__":
    unittest.main()
