# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the token endpoint exchange."""

import requests
import pytest
from conftest import CLIENT_ID, TENANT_ID, FakeResponse, make_token, token_response

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core.spc_exceptions import (
    AuthenticationError,
    ConfigurationError,
)
from sharepoint_client.core.spc_token import (
    AccessToken,
    TokenExchangeClient,
    decode_token_expiry,
)

TOKEN_URL = f"https://login.microsoftonline.com/{TENANT_ID}/oauth2/v2.0/token"


class TestDecodeTokenExpiry:
    """Test suite for reading the expiry of an access token."""

    def test_decode_token_expiry__exp_claim(self):
        assert decode_token_expiry(make_token(exp=1_800_000_000)) == 1_800_000_000

    def test_decode_token_expiry__opaque_token_falls_back(self):
        assert decode_token_expiry("opaque-token", now=1000) == 1000 + 3600

    def test_decode_token_expiry__missing_exp_falls_back(self):
        assert decode_token_expiry(make_token(), now=1000) == 1000 + 3600

    def test_decode_token_expiry__expired_token_still_read(self):
        """Test that an already expired exp is returned, not rejected."""
        assert decode_token_expiry(make_token(exp=10), now=1000) == 10


class TestTokenExchangeClient:
    """Test suite for TokenExchangeClient."""

    def test_token_endpoint(self):
        client = TokenExchangeClient(session=object())
        assert client.token_endpoint(TENANT_ID) == TOKEN_URL

    def test_exchange__authority_host_override(self, fake_session):
        client = TokenExchangeClient(session=fake_session)

        client.exchange(
            TENANT_ID,
            CLIENT_ID,
            client_secret="s3cret",
            authority_host="https://login.microsoftonline.us/",
        )

        assert fake_session.post.call_args.args[0] == (
            f"https://login.microsoftonline.us/{TENANT_ID}/oauth2/v2.0/token"
        )

    def test_exchange__client_secret_form(self, fake_session):
        client = TokenExchangeClient(session=fake_session)

        client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")

        args, kwargs = fake_session.post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs["data"] == {
            "grant_type": "client_credentials",
            "client_id": CLIENT_ID,
            "scope": "https://graph.microsoft.com/.default",
            "client_secret": "s3cret",
        }
        assert kwargs["headers"] == {"Content-Type": "application/x-www-form-urlencoded"}
        assert kwargs["timeout"] == con.TOKEN_REQUEST_TIMEOUT

    def test_exchange__client_assertion_form(self, fake_session):
        client = TokenExchangeClient(session=fake_session)

        client.exchange(TENANT_ID, CLIENT_ID, client_assertion="a.b.c")

        data = fake_session.post.call_args.kwargs["data"]
        assert data["client_assertion_type"] == (
            "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
        )
        assert data["client_assertion"] == "a.b.c"
        assert "client_secret" not in data

    def test_exchange__returns_token_and_expiry(self, fake_session):
        token = make_token(exp=1_900_000_000)
        fake_session.post.return_value = token_response(token)
        client = TokenExchangeClient(session=fake_session)

        result = client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")

        assert result == AccessToken(token, 1_900_000_000)

    @pytest.mark.parametrize(
        "credentials",
        [{}, {"client_secret": "s3cret", "client_assertion": "a.b.c"}],
    )
    def test_exchange__requires_exactly_one_credential(self, fake_session, credentials):
        client = TokenExchangeClient(session=fake_session)

        with pytest.raises(ConfigurationError):
            client.exchange(TENANT_ID, CLIENT_ID, **credentials)
        fake_session.post.assert_not_called()

    def test_exchange__http_error_includes_status_and_body(self, fake_session):
        body = '{"error":"invalid_client","error_description":"AADSTS7000215"}'
        fake_session.post.return_value = FakeResponse(400, text=body)
        client = TokenExchangeClient(session=fake_session)

        with pytest.raises(AuthenticationError) as exc_info:
            client.exchange(TENANT_ID, CLIENT_ID, client_secret="wrong")

        error = exc_info.value
        assert "400" in error.message
        assert "invalid_client" in error.message
        assert error.http_status == 400
        assert error.response_body == body
        assert error.to_dict()["http_status"] == 400

    def test_exchange__timeout_has_no_http_status(self, fake_session):
        fake_session.post.side_effect = requests.Timeout("read timed out")
        client = TokenExchangeClient(session=fake_session, timeout=5)

        with pytest.raises(AuthenticationError) as exc_info:
            client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")

        assert exc_info.value.http_status == con.HTTP_STATUS_NO_RESPONSE
        assert "5" in exc_info.value.message

    def test_exchange__connection_error(self, fake_session):
        fake_session.post.side_effect = requests.ConnectionError("name resolution failed")
        client = TokenExchangeClient(session=fake_session)

        with pytest.raises(AuthenticationError) as exc_info:
            client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")

        assert exc_info.value.http_status == 0
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_exchange__invalid_json(self, fake_session):
        fake_session.post.return_value = FakeResponse(200, text="<html>proxy</html>")
        client = TokenExchangeClient(session=fake_session)

        with pytest.raises(AuthenticationError) as exc_info:
            client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")
        assert exc_info.value.response_body == "<html>proxy</html>"

    def test_exchange__missing_access_token(self, fake_session):
        fake_session.post.return_value = FakeResponse(200, {"token_type": "Bearer"})
        client = TokenExchangeClient(session=fake_session)

        with pytest.raises(AuthenticationError):
            client.exchange(TENANT_ID, CLIENT_ID, client_secret="s3cret")
