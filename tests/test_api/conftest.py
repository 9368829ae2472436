"""Shared fixtures for the Discord gateway tests."""

import json
from dataclasses import dataclass, field
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from core.config import Settings

TIMESTAMP = "1729252800"


@dataclass
class FakeRequest:
    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@pytest.fixture
def signing_key():
    return Ed25519PrivateKey.generate()


@pytest.fixture
def public_key_hex(signing_key):
    return signing_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()


@pytest.fixture
def signed_request(signing_key):
    """Build a POST request signed the way Discord signs interactions."""
    def build(payload) -> FakeRequest:
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        signature = signing_key.sign(TIMESTAMP.encode() + body).hex()
        return FakeRequest(
            headers={
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": TIMESTAMP,
                "Content-Type": "application/json",
            },
            body=body,
        )
    return build


@pytest.fixture
def gateway(public_key_hex, active_service):
    """Point the interactions endpoint at an in-memory service."""
    settings = Settings(public_key=public_key_hex)
    with patch("api.interactions.get_settings", return_value=settings), \
            patch("api.interactions.get_service", return_value=active_service):
        yield active_service
