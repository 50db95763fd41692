"""Tests for the click CLI."""

from __future__ import annotations

import json
import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CloudSearchKit.cli.ui import cli

DEFAULT_CONFIG = str(REPO_ROOT / "config" / "default.yml")
SANDBOX_CONFIG = str(REPO_ROOT / "config" / "test" / "sandbox.yml")

_ENV = {
    "AWS_ACCESS_KEY_ID": "key_id",
    "AWS_SECRET_ACCESS_KEY": "secret_access_key",
    "AWS_SHARED_CREDENTIALS_FILE": os.devnull,
    "AWS_CONFIG_FILE": os.devnull,
    "AWS_EC2_METADATA_DISABLED": "true",
}


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def _invoke(self, *args: str):
        with patch("CloudSearchKit.cli.ui.load_dotenv"):
            return self.runner.invoke(cli, list(args))

    def test_search_print_url(self) -> None:
        result = self._invoke(
            "--config",
            DEFAULT_CONFIG,
            "search",
            "nom",
            "--filter",
            '{"and": {"foo": "bar", "baz": "bug"}}',
            "--facet",
            "genres",
            "--sort",
            "price:desc",
            "--page",
            "3",
            "--page-size",
            "20",
            "--print-url",
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.stdout.strip(),
            "http://search-my-domain.us-east-1.cloudsearch.amazonaws.com/2013-01-01/search"
            "?q=nom&fq=(and%20foo:'bar'baz:'bug')&facet.genres=%7B%7D&size=20&start=40&sort=price%20desc",
        )

    def test_search_sandbox_prints_empty_page(self) -> None:
        result = self._invoke("--config", SANDBOX_CONFIG, "search", "anything")
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.stdout[result.stdout.index("{") :])
        self.assertEqual(payload["ids"], [])
        self.assertEqual(payload["found"], 0)

    def test_search_rejects_bad_filter_json(self) -> None:
        result = self._invoke("--config", DEFAULT_CONFIG, "search", "--filter", "{nope", "--print-url")
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("--filter", result.output)

    def test_add_sandbox_succeeds(self) -> None:
        result = self._invoke(
            "--config",
            SANDBOX_CONFIG,
            "add",
            "1",
            "--field",
            "name=fritters",
            "--int-field",
            "year=2012",
            "--date-field",
            "published=2012-04-01",
        )
        self.assertEqual(result.exit_code, 0, result.output)

    def test_add_rejects_bad_int(self) -> None:
        result = self._invoke("--config", SANDBOX_CONFIG, "add", "1", "--int-field", "year=soon")
        self.assertNotEqual(result.exit_code, 0)

    def test_remove_sandbox_succeeds(self) -> None:
        result = self._invoke("--config", SANDBOX_CONFIG, "remove", "1")
        self.assertEqual(result.exit_code, 0, result.output)

    def test_sign_prints_headers(self) -> None:
        with patch.dict(os.environ, _ENV, clear=True):
            result = self._invoke(
                "--config",
                DEFAULT_CONFIG,
                "sign",
                "POST",
                "http://doc-d.us-west-2.cloudsearch.amazonaws.com/2013-01-01/documents/batch",
                "--body",
                "[]",
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Authorization: AWS4-HMAC-SHA256 Credential=key_id/", result.output)
        self.assertIn("/us-west-2/cloudsearch/aws4_request, SignedHeaders=host, Signature=", result.output)
        self.assertIn("X-Amz-Date: ", result.output)
        self.assertNotIn("secret_access_key", result.output)

    def test_sign_does_not_build_a_client(self) -> None:
        with patch.dict(os.environ, _ENV, clear=True):
            with patch("CloudSearchKit.cli.runner.CloudSearchClient") as client_cls:
                result = self._invoke(
                    "--config",
                    DEFAULT_CONFIG,
                    "sign",
                    "GET",
                    "http://search-d.us-east-1.cloudsearch.amazonaws.com/2013-01-01/search?q=x",
                )
        self.assertEqual(result.exit_code, 0, result.output)
        client_cls.assert_not_called()

    def test_sign_malformed_host_aborts(self) -> None:
        with patch.dict(os.environ, _ENV, clear=True):
            result = self._invoke("--config", DEFAULT_CONFIG, "sign", "GET", "http://localhost/x")
        self.assertNotEqual(result.exit_code, 0)


if __name__ == "__main__":
    unittest.main()
