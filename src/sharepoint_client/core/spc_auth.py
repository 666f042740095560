# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import asyncio
import threading
import time
from typing import Callable, Optional

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core import spc_logger
from sharepoint_client.core.spc_assertion import build_client_assertion
from sharepoint_client.core.spc_certificate import load_certificate_material
from sharepoint_client.core.spc_config import AuthConfig, ClientSecretCredential
from sharepoint_client.core.spc_exceptions import ConfigurationError
from sharepoint_client.core.spc_secure_material import SecureMaterial
from sharepoint_client.core.spc_token import AccessToken, TokenExchangeClient
from sharepoint_client.errors import ErrorMessages


class Authenticator:
    """
    Bearer token provider for one credential configuration.

    The token is cached until 30 seconds before its ``exp`` claim. Acquisition
    is serialized per instance, so concurrent callers never trigger duplicate
    exchanges. Certificate key material only lives for the duration of one
    assertion and is wiped afterwards.
    """

    def __init__(
        self,
        config: AuthConfig,
        *,
        token_client: Optional[TokenExchangeClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config
        self._token_client = token_client or TokenExchangeClient()
        self._clock = clock
        self._lock = threading.RLock()
        self._material = SecureMaterial()

        self._access_token: Optional[str] = None
        self._expires_on: Optional[int] = None
        self._pending: Optional[asyncio.Future] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def config(self) -> AuthConfig:
        return self._config

    @property
    def expires_on(self) -> Optional[int]:
        return self._expires_on

    def _cached_token(self) -> Optional[str]:
        token, expires_on = self._access_token, self._expires_on
        if token is None or expires_on is None:
            return None
        if self._clock() < expires_on - con.TOKEN_EXPIRY_MARGIN:
            return token
        return None

    def get_access_token(self) -> str:
        """Return a valid access token, exchanging credentials only when needed."""
        with self._lock:
            cached = self._cached_token()
            if cached is not None:
                spc_logger.log_debug("Reusing cached access token")
                return cached

            spc_logger.log_debug(
                f"Acquiring access token with {self._config.auth_method} "
                f"for client {self._config.client_id}"
            )
            # Cache is only written after a successful exchange
            result = self._acquire_token()
            self._access_token = result.token
            self._expires_on = result.expires_on
            return self._access_token

    def refresh_token(self) -> None:
        """Invalidate the cached token; the next request performs a new exchange."""
        with self._lock:
            self._access_token = None
            self._expires_on = None

    def get_headers(self, content_type: str = con.DEFAULT_CONTENT_TYPE) -> dict:
        token = self.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": content_type,
        }

    def get_header_lines(self, content_type: str = con.DEFAULT_CONTENT_TYPE) -> list:
        return [f"{name}: {value}" for name, value in self.get_headers(content_type).items()]

    async def aget_access_token(self) -> str:
        """
        Awaitable variant of ``get_access_token``.

        The blocking exchange runs in a worker thread. Concurrent awaiters share
        a single in-flight acquisition and no lock is held across ``await``.
        """
        cached = self._cached_token()
        if cached is not None:
            return cached

        loop = asyncio.get_running_loop()
        pending = self._pending
        if pending is None or pending.done() or pending.get_loop() is not loop:
            pending = loop.create_task(asyncio.to_thread(self.get_access_token))
            self._pending = pending
            pending.add_done_callback(self._clear_pending)
        return await asyncio.shield(pending)

    def _clear_pending(self, task: asyncio.Future) -> None:
        if self._pending is task:
            self._pending = None

    async def aget_headers(self, content_type: str = con.DEFAULT_CONTENT_TYPE) -> dict:
        token = await self.aget_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": content_type,
        }

    def get_auth_info(self) -> dict:
        with self._lock:
            return {
                "method": self._config.auth_method,
                "class": type(self._config.credential).__name__,
                "tenant_id": self._config.tenant_id,
                "client_id": self._config.client_id,
                "has_token": self._access_token is not None,
                "expires_on": self._expires_on,
            }

    def reinitialize(self, config: Optional[AuthConfig] = None) -> None:
        """Drop the cached token and key material, optionally switching configuration."""
        with self._lock:
            self._material.release()
            self._access_token = None
            self._expires_on = None
            if config is not None:
                self._config = config

    def close(self) -> None:
        with self._lock:
            self._material.release()
            self._access_token = None
            self._expires_on = None

    def _acquire_token(self) -> AccessToken:
        config = self._config
        credential = config.credential

        if isinstance(credential, ClientSecretCredential):
            if not credential.client_secret:
                raise ConfigurationError(ErrorMessages.Auth.client_secret_missing())
            return self._token_client.exchange(
                config.tenant_id,
                config.client_id,
                client_secret=credential.client_secret,
                scope=config.scope,
                authority_host=config.authority_host,
            )

        try:
            cert_material = load_certificate_material(credential, self._material)
            assertion = build_client_assertion(
                config.client_id,
                config.tenant_id,
                cert_material.private_key,
                cert_material.thumbprint,
                now=int(self._clock()),
                authority_host=config.authority_host,
            )
        finally:
            self._material.release()

        return self._token_client.exchange(
            config.tenant_id,
            config.client_id,
            client_assertion=assertion,
            scope=config.scope,
            authority_host=config.authority_host,
        )
