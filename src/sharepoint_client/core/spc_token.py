# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import time
from typing import NamedTuple, Optional

import jwt
import requests

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core import spc_logger
from sharepoint_client.core.spc_exceptions import (
    AuthenticationError,
    ConfigurationError,
)
from sharepoint_client.errors import ErrorMessages


class AccessToken(NamedTuple):
    token: str
    expires_on: int


def decode_token_expiry(token: str, now: Optional[float] = None) -> int:
    """Return the ``exp`` claim of ``token``, or now + 3600 if it cannot be read.

    The signature is not verified: the value only drives local cache expiry.
    """
    if now is None:
        now = time.time()
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
        return int(claims["exp"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
        spc_logger.log_debug(
            f"Could not read token expiry ({type(e).__name__}), "
            f"assuming {con.DEFAULT_TOKEN_LIFETIME} seconds"
        )
        return int(now) + con.DEFAULT_TOKEN_LIFETIME


class TokenExchangeClient:
    """Client-credentials grant against the Azure AD v2.0 token endpoint."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = con.TOKEN_REQUEST_TIMEOUT,
        authority_host: str = con.AUTHORITY_HOST,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout
        self._authority_host = authority_host.rstrip("/")

    def token_endpoint(self, tenant_id: str, authority_host: Optional[str] = None) -> str:
        host = authority_host.rstrip("/") if authority_host else self._authority_host
        return host + con.TOKEN_ENDPOINT_PATH.format(tenant_id=tenant_id)

    def exchange(
        self,
        tenant_id: str,
        client_id: str,
        *,
        client_secret: Optional[str] = None,
        client_assertion: Optional[str] = None,
        scope: str = con.SCOPE_GRAPH_DEFAULT,
        authority_host: Optional[str] = None,
    ) -> AccessToken:
        """Exchange a client secret or a signed assertion for an access token.

        ``authority_host`` overrides the host given at construction.
        """
        if bool(client_secret) == bool(client_assertion):
            raise ConfigurationError(ErrorMessages.Auth.exchange_credential_required())

        data = {
            "grant_type": con.GRANT_TYPE_CLIENT_CREDENTIALS,
            "client_id": client_id,
            "scope": scope,
        }
        if client_secret:
            data["client_secret"] = client_secret
        else:
            data["client_assertion_type"] = con.CLIENT_ASSERTION_TYPE_JWT_BEARER
            data["client_assertion"] = client_assertion

        return self._request_token(self.token_endpoint(tenant_id, authority_host), data)

    def _request_token(self, url: str, data: dict) -> AccessToken:
        spc_logger.log_debug(f"Requesting access token from {url}")
        try:
            response = self._session.post(
                url,
                data=data,
                headers={"Content-Type": con.FORM_CONTENT_TYPE},
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise AuthenticationError(
                ErrorMessages.Auth.token_request_timeout(self._timeout),
                http_status=con.HTTP_STATUS_NO_RESPONSE,
            ) from e
        except requests.RequestException as e:
            raise AuthenticationError(
                ErrorMessages.Auth.token_request_network_error(str(e)),
                http_status=con.HTTP_STATUS_NO_RESPONSE,
            ) from e

        if response.status_code != 200:
            spc_logger.log_debug(
                f"Token endpoint answered HTTP {response.status_code}"
            )
            raise AuthenticationError(
                ErrorMessages.Auth.token_request_failed(
                    response.status_code, response.text
                ),
                http_status=response.status_code,
                response_body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise AuthenticationError(
                ErrorMessages.Auth.invalid_token_response(),
                http_status=response.status_code,
                response_body=response.text,
            ) from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            raise AuthenticationError(
                ErrorMessages.Auth.token_missing_in_response(),
                http_status=response.status_code,
                response_body=response.text,
            )

        return AccessToken(access_token, decode_token_expiry(access_token))
