"""Shared fixtures for encoder tests."""

from datetime import datetime, timezone

import pytest

from email_compose import ComposeRequest, EncoderConfig, MessageEncoder

FIXED_DATE = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
FIXED_DATE_HEADER = "Tue, 02 Jan 2024 03:04:05 +0000"


class CountingRandom:
    """Random source returning n copies of the call number (1, 2, 3, ...)."""

    def __init__(self):
        self.calls = 0

    def __call__(self, size: int) -> bytes:
        self.calls += 1
        return bytes([self.calls % 256]) * size


@pytest.fixture
def random_source():
    return CountingRandom()


@pytest.fixture
def config(random_source):
    return EncoderConfig(random_source=random_source, clock=lambda: FIXED_DATE)


@pytest.fixture
def encoder(config):
    return MessageEncoder(config)


@pytest.fixture
def make_request():
    """Factory for a minimal valid request with overrides."""
    def _make(**overrides):
        fields = {
            "from_": "a@b.com",
            "to": ["c@d.com"],
            "subject": "Hi",
        }
        fields.update(overrides)
        return ComposeRequest(**fields)

    return _make
