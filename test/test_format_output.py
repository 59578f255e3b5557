"""End-to-end scenarios for the one-shot `format_output` helper."""

import json
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from GhpConnector.formatters import (
    KNOWN_FORMATS,
    UnsupportedFormatError,
    create_default_factory,
    create_default_registry,
    format_output,
)

ISSUES = [
    {"number": 1, "title": "First", "state": "open", "labels": [{"name": "bug"}]},
    {"number": 2, "title": "Second", "state": "closed", "assignees": [{"login": "octo"}]},
]


class TestFormatOutputScenarios(unittest.TestCase):
    def test_json_object(self) -> None:
        self.assertEqual(format_output({"id": 123, "name": "Test"}, "json"), '{\n  "id": 123,\n  "name": "Test"\n}')

    def test_empty_text(self) -> None:
        self.assertEqual(format_output([], "text"), "No items.")

    def test_default_format_is_human(self) -> None:
        self.assertEqual(format_output([]), "No items.")
        self.assertEqual(
            format_output({"number": 42, "title": "t", "state": "open"}, config={"use_colors": False}),
            "#42 t\nStatus: open",
        )

    def test_issue_list_in_human_mentions_both_issues(self) -> None:
        out = format_output(ISSUES, "human", {"use_colors": False})
        self.assertIn("Found 2 issues:", out)
        self.assertIn("#1", out)
        self.assertIn("#2", out)

    def test_same_data_every_format(self) -> None:
        rendered = {fmt: format_output(ISSUES, fmt, {"use_colors": False}) for fmt in KNOWN_FORMATS}

        self.assertEqual(json.loads(rendered["json"]), ISSUES)
        self.assertEqual(rendered["text"], rendered["human"])
        self.assertEqual(rendered["minimal"], "1\n2")
        self.assertEqual(rendered["csv"].split("\n")[0], "number,state,title,assignees,labels")
        self.assertEqual(
            rendered["table"].split("\n")[0].split(), ["NUMBER", "STATE", "TITLE", "ASSIGNEES", "LABELS"]
        )

    def test_unknown_format(self) -> None:
        with self.assertRaisesRegex(UnsupportedFormatError, "Unsupported format: yaml"):
            format_output({}, "yaml")

    def test_shared_factory_keeps_registered_instances_unconfigured(self) -> None:
        registry = create_default_registry()
        factory = create_default_factory(registry)

        format_output({"a": 1}, "json", {"compact": True}, factory=factory)

        self.assertEqual(registry.get_formatter("json").format({"a": 1}), '{\n  "a": 1\n}')
        self.assertEqual(format_output({"a": 1}, "json", factory=factory), '{\n  "a": 1\n}')

    def test_default_registry_contents(self) -> None:
        registry = create_default_registry()
        self.assertEqual(set(registry.registered_formats()), set(KNOWN_FORMATS))
        self.assertEqual(registry.default_format, "human")


if __name__ == "__main__":
    unittest.main()
