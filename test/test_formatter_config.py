"""Tests for formatter config defaults, merging and validation."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from GhpConnector.formatters import FormatterConfigurationError, validate_config
from GhpConnector.formatters.config import format_family


class TestFormatterConfigDefaults(unittest.TestCase):
    def test_json_defaults(self) -> None:
        self.assertEqual(
            validate_config(None, "json"),
            {
                "use_colors": True,
                "max_width": 80,
                "indent": 2,
                "sort_keys": False,
                "compact": False,
                "pretty": True,
            },
        )

    def test_text_and_human_share_defaults(self) -> None:
        text = validate_config(None, "text")
        self.assertEqual(text, validate_config(None, "human"))
        self.assertEqual(text["date_format"], "local")
        self.assertEqual(text["timezone"], "local")
        self.assertEqual(text["indent_size"], 2)
        self.assertFalse(text["detailed"])

    def test_table_family_covers_csv(self) -> None:
        self.assertEqual(format_family("csv"), "table")
        self.assertEqual(validate_config(None, "csv")["columns"], ())

    def test_minimal_and_unknown_get_base_keys(self) -> None:
        self.assertEqual(validate_config(None, "minimal"), {"use_colors": True, "max_width": 80})
        self.assertEqual(format_family("custom"), "base")

    def test_defaults_are_fresh_copies(self) -> None:
        first = validate_config(None, "table")
        first["alignment"]["id"] = "right"
        self.assertEqual(validate_config(None, "table")["alignment"], {})


class TestFormatterConfigMerge(unittest.TestCase):
    def test_override_keeps_sibling_defaults(self) -> None:
        config = validate_config({"indent": 4}, "json")
        self.assertEqual(config["indent"], 4)
        self.assertTrue(config["pretty"])
        self.assertEqual(config["max_width"], 80)

    def test_unknown_keys_and_none_values_are_ignored(self) -> None:
        config = validate_config({"flavor": "spicy", "indent": None, "detailed": True}, "json")
        self.assertNotIn("flavor", config)
        self.assertNotIn("detailed", config)
        self.assertEqual(config["indent"], 2)

    def test_date_format_is_normalized(self) -> None:
        self.assertEqual(validate_config({"date_format": "iso"}, "text")["date_format"], "ISO")
        self.assertEqual(validate_config({"date_format": "Relative"}, "text")["date_format"], "relative")

    def test_columns_become_tuples(self) -> None:
        config = validate_config({"columns": ["id", "name"], "alignment": {"id": "RIGHT"}}, "table")
        self.assertEqual(config["columns"], ("id", "name"))
        self.assertEqual(config["alignment"], {"id": "right"})

    def test_indent_with_compact_is_allowed(self) -> None:
        config = validate_config({"indent": 4, "pretty": False, "compact": True}, "json")
        self.assertTrue(config["compact"])


class TestFormatterConfigValidation(unittest.TestCase):
    def test_rejects_negative_indent(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "json.indent must be >= 0"):
            validate_config({"indent": -1}, "json")

    def test_rejects_non_integer_indent(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "json.indent must be an integer"):
            validate_config({"indent": "2"}, "json")

    def test_rejects_non_bool_flags(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "text.use_colors must be a boolean"):
            validate_config({"use_colors": "yes"}, "text")

    def test_rejects_indent_without_pretty(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "requires pretty"):
            validate_config({"indent": 4, "pretty": False}, "json")

    def test_rejects_unknown_date_format(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "date_format"):
            validate_config({"date_format": "fancy"}, "human")

    def test_rejects_unknown_timezone(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "Mars/Olympus"):
            validate_config({"timezone": "Mars/Olympus"}, "text")

    def test_accepts_known_timezone(self) -> None:
        self.assertEqual(validate_config({"timezone": "UTC"}, "text")["timezone"], "UTC")

    def test_rejects_zero_max_width(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "max_width must be >= 1"):
            validate_config({"max_width": 0}, "table")

    def test_rejects_bad_alignment(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "alignment.id"):
            validate_config({"alignment": {"id": "diagonal"}}, "table")

    def test_rejects_string_columns(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "columns must be a list"):
            validate_config({"columns": "id,name"}, "csv")

    def test_error_message_prefix(self) -> None:
        with self.assertRaisesRegex(FormatterConfigurationError, "^Invalid formatter configuration: "):
            validate_config({"indent": -3}, "json")


if __name__ == "__main__":
    unittest.main()
