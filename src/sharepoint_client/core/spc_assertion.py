# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import secrets
import time
from typing import Any, Optional

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core.spc_exceptions import SigningError
from sharepoint_client.errors import ErrorMessages


def build_client_assertion(
    client_id: str,
    tenant_id: str,
    private_key: Any,
    thumbprint: str,
    *,
    now: Optional[int] = None,
    authority_host: str = con.AUTHORITY_HOST,
) -> str:
    """
    Build the RS256-signed JWT presented as ``client_assertion`` to Azure AD.

    The assertion is single use: a fresh ``jti`` is generated on every call and
    its validity window (``nbf``..``exp``) is independent of the access token
    it is exchanged for.

    :param private_key: RSA private key object, or PEM-encoded key bytes/str.
    :param thumbprint: base64url SHA-1 thumbprint of the certificate (``x5t``).
    :return: The compact-serialized JWT.
    """
    if not isinstance(private_key, (str, bytes, rsa.RSAPrivateKey)):
        raise SigningError(
            ErrorMessages.Auth.unsupported_key_type(type(private_key).__name__)
        )

    issued_at = int(time.time()) if now is None else int(now)
    claims = {
        "aud": authority_host.rstrip("/")
        + con.TOKEN_ENDPOINT_PATH.format(tenant_id=tenant_id),
        "iss": client_id,
        "sub": client_id,
        "jti": secrets.token_hex(16),
        "nbf": issued_at,
        "exp": issued_at + con.ASSERTION_LIFETIME,
    }
    headers = {"alg": "RS256", "x5t": thumbprint}

    try:
        return jwt.encode(claims, private_key, algorithm="RS256", headers=headers)
    except (jwt.PyJWTError, ValueError, TypeError) as e:
        raise SigningError(ErrorMessages.Auth.assertion_signing_failed(str(e))) from e
