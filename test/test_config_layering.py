"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CloudSearchKit.config import load_config, load_config_with_defaults, merge_config_dicts, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "info", "to_file": False, "dir": "log"},
        "domain": {
            "name": "testdomain",
            "region": "us-east-1",
            "api_version": "2013-01-01",
            "mode": "live",
            "timeout": 30,
        },
        "search": {"page_size": 10, "return_fields": []},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.domain.name, "testdomain")
        self.assertEqual(cfg.domain.timeout, 30.0)
        self.assertEqual(cfg.search.page_size, 10)
        self.assertEqual(cfg.search.return_fields, ())

    def test_optional_sections_use_defaults(self) -> None:
        cfg = parse_config_dict({"domain": {"name": "d"}})
        self.assertEqual(cfg.domain.region, "us-east-1")
        self.assertEqual(cfg.domain.api_version, "2013-01-01")
        self.assertEqual(cfg.domain.mode, "live")
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.search.page_size, 10)

    def test_missing_domain_section(self) -> None:
        with self.assertRaisesRegex(ValueError, "domain"):
            parse_config_dict({})

    def test_missing_domain_name(self) -> None:
        raw = _base_raw_config()
        del raw["domain"]["name"]
        with self.assertRaisesRegex(ValueError, "domain\\.name"):
            parse_config_dict(raw)

    def test_blank_domain_name(self) -> None:
        raw = _base_raw_config()
        raw["domain"]["name"] = "  "
        with self.assertRaisesRegex(ValueError, "domain\\.name"):
            parse_config_dict(raw)

    def test_mode_is_normalized_and_validated(self) -> None:
        raw = _base_raw_config()
        raw["domain"]["mode"] = "SANDBOX"
        self.assertEqual(parse_config_dict(raw).domain.mode, "sandbox")
        raw["domain"]["mode"] = "offline"
        with self.assertRaisesRegex(ValueError, "domain\\.mode"):
            parse_config_dict(raw)

    def test_timeout_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["domain"]["timeout"] = "30"
        with self.assertRaisesRegex(TypeError, "domain\\.timeout"):
            parse_config_dict(raw)

    def test_profile_is_optional(self) -> None:
        self.assertIsNone(parse_config_dict(_base_raw_config()).domain.profile)
        raw = _base_raw_config()
        raw["domain"]["profile"] = " search "
        self.assertEqual(parse_config_dict(raw).domain.profile, "search")
        raw["domain"]["profile"] = 3
        with self.assertRaisesRegex(TypeError, "domain\\.profile"):
            parse_config_dict(raw)

    def test_page_size_must_be_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["page_size"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.page_size"):
            parse_config_dict(raw)

    def test_return_fields_must_be_strings(self) -> None:
        raw = _base_raw_config()
        raw["search"]["return_fields"] = ["name", 3]
        with self.assertRaisesRegex(TypeError, "search\\.return_fields\\[1\\]"):
            parse_config_dict(raw)

    def test_log_level_validated(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_merge_is_deep(self) -> None:
        merged = merge_config_dicts(_base_raw_config(), {"domain": {"region": "eu-west-1"}})
        self.assertEqual(merged["domain"]["region"], "eu-west-1")
        self.assertEqual(merged["domain"]["name"], "testdomain")

    def test_load_default_file(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.domain.mode, "live")
        self.assertEqual(cfg.search.page_size, 10)

    def test_override_file_merges_over_defaults(self) -> None:
        cfg = load_config_with_defaults(
            REPO_ROOT / "config" / "test" / "sandbox.yml",
            default_path=REPO_ROOT / "config" / "default.yml",
        )
        self.assertEqual(cfg.domain.name, "testdomain")
        self.assertEqual(cfg.domain.region, "my-region")
        self.assertEqual(cfg.domain.mode, "sandbox")
        self.assertEqual(cfg.domain.api_version, "2013-01-01")
        self.assertEqual(cfg.search.return_fields, ("name", "address"))

    def test_non_mapping_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "mapping"):
                load_config(path)

    def test_base_config_not_mutated_by_merge(self) -> None:
        base = _base_raw_config()
        snapshot = deepcopy(base)
        merge_config_dicts(base, {"domain": {"name": "other"}})
        self.assertEqual(base, snapshot)


if __name__ == "__main__":
    unittest.main()
