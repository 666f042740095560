# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import json
import os
import time
from unittest.mock import MagicMock

import jwt
import pytest

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

CERT_PEM_PATH = os.path.join(DATA_DIR, "test_cert.pem")
CERT_DER_PATH = os.path.join(DATA_DIR, "test_cert.der")
KEY_PEM_PATH = os.path.join(DATA_DIR, "test_key.pem")
KEY_ENCRYPTED_PEM_PATH = os.path.join(DATA_DIR, "test_key_encrypted.pem")
PFX_PATH = os.path.join(DATA_DIR, "test_cert.pfx")

PASSPHRASE = "test-passphrase"

# SHA-1 of tests/data/test_cert.der
EXPECTED_X5T = "ZjwlktDk9rehoaRQeBlEIln6o3Y"
EXPECTED_SHA1_HEX = "663C2592D0E4F6B7A1A1A4507819442259FAA376"

TENANT_ID = "72f988bf-86f1-41af-91ab-2d7cd011db47"
CLIENT_ID = "11111111-2222-3333-4444-555555555555"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(body) if body is not None else ""
        self.text = text

    def json(self):
        return json.loads(self.text)


def make_token(exp=None, **claims):
    """JWT shaped like a Graph access token; only its claims matter to the client."""
    payload = {"aud": "https://graph.microsoft.com", **claims}
    if exp is not None:
        payload["exp"] = exp
    return jwt.encode(payload, "graph-access-token-test-signing-key-0123456789", algorithm="HS256")


def token_response(token=None, status_code=200):
    if token is None:
        token = make_token(exp=int(time.time()) + 3600)
    return FakeResponse(
        status_code,
        {"token_type": "Bearer", "expires_in": 3599, "access_token": token},
    )


@pytest.fixture
def fake_session():
    session = MagicMock()
    session.post.return_value = token_response()
    return session


@pytest.fixture
def cert_pem_bytes():
    with open(CERT_PEM_PATH, "rb") as f:
        return f.read()


@pytest.fixture
def key_pem_bytes():
    with open(KEY_PEM_PATH, "rb") as f:
        return f.read()


@pytest.fixture
def pfx_bytes():
    with open(PFX_PATH, "rb") as f:
        return f.read()


@pytest.fixture
def clean_spc_env(monkeypatch):
    """Remove every SPC_* variable inherited from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("SPC_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
