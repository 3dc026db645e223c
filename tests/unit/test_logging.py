"""
Unit Tests for Log Redaction
============================

Version: 0.1.0
"""

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from zkjobs.logging import censor_secrets, get_logger, setup_logging
from zkjobs.logging.logger import REDACTED


@pytest.fixture
def json_log_stream() -> Generator[io.StringIO, None, None]:
    """Route JSON logging into a buffer for one test and detach it afterwards."""
    stream = io.StringIO()
    setup_logging(
        log_level="INFO",
        json_logs=True,
        service_name="test",
        network_id="TestNet",
        stream=stream,
    )
    yield stream
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


class TestCensorSecrets:
    def test_private_witness_values_redacted(self) -> None:
        event = censor_secrets(
            None,
            "info",
            {
                "event": "eligibility_proof_requested",
                "skill_score": 80,
                "blinding_factor": "0xabc",
                "salary": 125_000,
                "required_threshold": 70,
            },
        )

        assert event["skill_score"] == REDACTED
        assert event["blinding_factor"] == REDACTED
        assert event["salary"] == REDACTED
        assert event["required_threshold"] == 70
        assert event["event"] == "eligibility_proof_requested"

    def test_nested_request_bodies_redacted(self) -> None:
        event = censor_secrets(
            None,
            "info",
            {
                "body": {
                    "circuit": "SkillCircuit",
                    "inputs": {"private": {"skill_score": 80}, "public": {"required_threshold": 70}},
                },
                "circuit_key": "k",
            },
        )

        assert event["body"]["inputs"]["private"] == REDACTED
        assert event["body"]["inputs"]["public"] == {"required_threshold": 70}
        assert event["circuit_key"] == REDACTED


class TestSetupLogging:
    def test_json_logs_redact(self, json_log_stream: io.StringIO) -> None:
        logger = get_logger("tests.logging")

        logger.info("witness_seen", skill_score=80, job_id=0)

        lines = [line for line in json_log_stream.getvalue().splitlines() if "witness_seen" in line]
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["skill_score"] == REDACTED
        assert record["job_id"] == 0
        assert record["service"] == "test"
        assert record["network_id"] == "TestNet"
        assert record["level"] == "info"
