"""Tests for logger configuration and secret masking."""

import logging
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CloudSearchKit.utils.log import RedactSecretsFilter, configure_logging, log, redact


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("CloudSearchKit", logging.INFO, __file__, 1, msg, args, None)


class TestRedact(unittest.TestCase):
    def test_authorization_signature(self) -> None:
        header = (
            "Authorization: AWS4-HMAC-SHA256 Credential=key_id/20130101/us-east-1/cloudsearch/aws4_request, "
            "SignedHeaders=host, Signature=5d672d79c15b13162d9279b0855cfba6789a8edb4c82c400e06b5924a6f2b5d7"
        )
        self.assertEqual(
            redact(header),
            "Authorization: AWS4-HMAC-SHA256 Credential=key_id/20130101/us-east-1/cloudsearch/aws4_request, "
            "SignedHeaders=host, Signature=***",
        )

    def test_session_token_and_secret_key(self) -> None:
        self.assertEqual(redact("X-Amz-Security-Token: FQoGZXIvYXdz"), "X-Amz-Security-Token: ***")
        self.assertEqual(redact("{'X-Amz-Security-Token': 'abc'}"), "{'X-Amz-Security-Token': '***'}")
        self.assertEqual(redact("AWS_SECRET_ACCESS_KEY=wJalrXUtnFEMI"), "AWS_SECRET_ACCESS_KEY=***")

    def test_plain_text_is_untouched(self) -> None:
        text = "Search request: url=http://search-d.us-east-1.cloudsearch.amazonaws.com/2013-01-01/search?q=x"
        self.assertEqual(redact(text), text)


class TestRedactSecretsFilter(unittest.TestCase):
    def test_formatted_arguments_are_masked(self) -> None:
        record = _record("headers=%s", {"Authorization": "AWS4-HMAC-SHA256 Signature=abcdef0123"})
        self.assertTrue(RedactSecretsFilter().filter(record))
        self.assertEqual(record.getMessage(), "headers={'Authorization': 'AWS4-HMAC-SHA256 Signature=***'}")

    def test_clean_record_keeps_args(self) -> None:
        record = _record("found=%d", 3)
        RedactSecretsFilter().filter(record)
        self.assertEqual(record.args, (3,))


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self) -> None:
        for handler in list(log.handlers):
            handler.close()
        log.handlers.clear()

    def test_handlers_carry_redaction(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(level="DEBUG", action="sign", log_to_file=True, log_dir=tmp)
            self.assertEqual(len(log.handlers), 2)
            for handler in log.handlers:
                self.assertTrue(any(isinstance(f, RedactSecretsFilter) for f in handler.filters))
            log.info("Signature=%s", "deadbeef")
            for handler in list(log.handlers):
                handler.close()
            log.handlers.clear()
            written = next((Path(tmp) / "sign").glob("sign_*.log")).read_text(encoding="utf-8")
        self.assertIn("[INFO] Signature=***", written)
        self.assertNotIn("deadbeef", written)

    def test_level_is_applied_to_console(self) -> None:
        configure_logging(level="warning")
        self.assertEqual(log.handlers[0].level, logging.WARNING)
        self.assertFalse(log.propagate)


if __name__ == "__main__":
    unittest.main()
