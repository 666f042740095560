# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Credential configuration.

One ``AuthConfig`` describes one app registration and one credential. It is
built explicitly (or with one of the loaders below) and handed to exactly one
``Authenticator``; there is no process-wide registry of configurations.
"""

import json
import os
import re
import uuid
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

import yaml
from dotenv import dotenv_values

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core import spc_logger
from sharepoint_client.core.spc_exceptions import ConfigurationError
from sharepoint_client.errors import ErrorMessages

_DOMAIN_PATTERN = re.compile(
    r"^(?=.{1,253}$)([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}$"
)


@dataclass(frozen=True)
class ClientSecretCredential:
    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class PfxCertificateCredential:
    path: Optional[str] = None
    passphrase: Optional[str] = field(default=None, repr=False)
    data: Optional[bytes] = field(default=None, repr=False)


@dataclass(frozen=True)
class PemCertificateCredential:
    cert_path: Optional[str] = None
    key_path: Optional[str] = None
    passphrase: Optional[str] = field(default=None, repr=False)
    cert_data: Optional[bytes] = field(default=None, repr=False)
    key_data: Optional[bytes] = field(default=None, repr=False)


Credential = Union[
    ClientSecretCredential, PfxCertificateCredential, PemCertificateCredential
]

_METHOD_BY_TYPE = {
    ClientSecretCredential: con.AUTH_CLIENT_SECRET,
    PfxCertificateCredential: con.AUTH_CERTIFICATE_PFX,
    PemCertificateCredential: con.AUTH_CERTIFICATE_PEM,
}


@dataclass(frozen=True)
class AuthConfig:
    tenant_id: str
    client_id: str
    credential: Credential
    scope: str = con.SCOPE_GRAPH_DEFAULT
    authority_host: str = con.AUTHORITY_HOST

    def __post_init__(self):
        if not self.tenant_id:
            raise ConfigurationError(ErrorMessages.Config.required_value("tenant_id"))
        if not self.client_id:
            raise ConfigurationError(ErrorMessages.Config.required_value("client_id"))
        if type(self.credential) not in _METHOD_BY_TYPE:
            raise ConfigurationError(
                ErrorMessages.Config.unsupported_credential(
                    type(self.credential).__name__
                )
            )

    @property
    def auth_method(self) -> str:
        return _METHOD_BY_TYPE[type(self.credential)]

    @property
    def token_endpoint(self) -> str:
        return self.authority_host.rstrip("/") + con.TOKEN_ENDPOINT_PATH.format(
            tenant_id=self.tenant_id
        )


def normalize_auth_method(method: str) -> str:
    normalized = method.strip().lower()
    normalized = con.AUTH_METHOD_ALIASES.get(normalized, normalized)
    if normalized not in con.AUTH_METHODS:
        raise ConfigurationError(
            ErrorMessages.Config.invalid_auth_method(method, con.AUTH_METHODS)
        )
    return normalized


def verify_guid(value: str, parameter_name: str) -> None:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise ConfigurationError(
            ErrorMessages.Common.invalid_guid(parameter_name),
            status_code=con.ERROR_INVALID_GUID,
        )


def verify_tenant(value: str, parameter_name: str) -> None:
    try:
        uuid.UUID(value)
        return
    except (ValueError, TypeError, AttributeError):
        pass
    if not isinstance(value, str) or not _DOMAIN_PATTERN.match(value):
        raise ConfigurationError(ErrorMessages.Common.invalid_tenant(parameter_name))


def verify_cert_path(path: str, parameter_name: str, extensions: tuple) -> None:
    if not os.path.exists(path) or not os.path.isfile(path):
        raise ConfigurationError(ErrorMessages.Config.invalid_cert_path(parameter_name))
    if not path.lower().endswith(extensions):
        raise ConfigurationError(
            ErrorMessages.Config.invalid_cert_format(parameter_name, extensions)
        )


def _read_env(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config_from_env(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = None,
) -> AuthConfig:
    """
    Build an ``AuthConfig`` from ``SPC_*`` environment variables.

    Values from ``env_file`` (dotenv format) are used only where the process
    environment does not define the variable.
    """
    env: dict = {}
    if env_file:
        if not os.path.isfile(env_file):
            raise ConfigurationError(
                ErrorMessages.Config.config_file_unreadable(env_file, "file not found")
            )
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ if environ is None else environ)

    tenant_id = _read_env(env, con.SPC_TENANT_ID)
    client_id = _read_env(env, con.SPC_CLIENT_ID)
    if tenant_id is None:
        raise ConfigurationError(ErrorMessages.Config.required_value(con.SPC_TENANT_ID))
    if client_id is None:
        raise ConfigurationError(ErrorMessages.Config.required_value(con.SPC_CLIENT_ID))
    verify_tenant(tenant_id, con.SPC_TENANT_ID)
    verify_guid(client_id, con.SPC_CLIENT_ID)

    secret = _read_env(env, con.SPC_CLIENT_SECRET)
    pfx_path = _read_env(env, con.SPC_PFX_PATH)
    cert_path = _read_env(env, con.SPC_CERT_PATH)
    key_path = _read_env(env, con.SPC_KEY_PATH)
    passphrase = env.get(con.SPC_CERT_PASSPHRASE) or None

    method = _read_env(env, con.SPC_AUTH_METHOD)
    if method is not None:
        method = normalize_auth_method(method)
    else:
        provided = [
            m
            for m, value in (
                (con.AUTH_CLIENT_SECRET, secret),
                (con.AUTH_CERTIFICATE_PFX, pfx_path),
                (con.AUTH_CERTIFICATE_PEM, cert_path),
            )
            if value
        ]
        if len(provided) != 1:
            raise ConfigurationError(ErrorMessages.Config.ambiguous_credentials())
        method = provided[0]

    spc_logger.log_debug(
        f"Loaded {method} configuration for client {client_id} in tenant {tenant_id}"
    )
    return _build_config(
        tenant_id,
        client_id,
        method,
        secret=secret,
        pfx_path=pfx_path,
        cert_path=cert_path,
        key_path=key_path,
        passphrase=passphrase,
        names={
            "secret": con.SPC_CLIENT_SECRET,
            "pfx_path": con.SPC_PFX_PATH,
            "cert_path": con.SPC_CERT_PATH,
        },
    )


def _build_config(
    tenant_id,
    client_id,
    method,
    secret=None,
    pfx_path=None,
    cert_path=None,
    key_path=None,
    passphrase=None,
    names=None,
) -> AuthConfig:
    names = names or {}
    match method:
        case con.AUTH_CLIENT_SECRET:
            if not secret:
                raise ConfigurationError(
                    ErrorMessages.Config.credential_required_for_method(
                        names.get("secret", con.CONFIG_SECRET), method
                    )
                )
            credential = ClientSecretCredential(client_secret=secret)
        case con.AUTH_CERTIFICATE_PFX:
            name = names.get("pfx_path", con.CONFIG_PATH)
            if not pfx_path:
                raise ConfigurationError(
                    ErrorMessages.Config.credential_required_for_method(name, method)
                )
            verify_cert_path(pfx_path, name, con.PFX_EXTENSIONS)
            credential = PfxCertificateCredential(path=pfx_path, passphrase=passphrase)
        case con.AUTH_CERTIFICATE_PEM:
            name = names.get("cert_path", con.CONFIG_CERT_PATH)
            if not cert_path:
                raise ConfigurationError(
                    ErrorMessages.Config.credential_required_for_method(name, method)
                )
            verify_cert_path(cert_path, name, con.PEM_CERT_EXTENSIONS)
            if key_path and not os.path.isfile(key_path):
                raise ConfigurationError(
                    ErrorMessages.Config.invalid_cert_path(
                        names.get("key_path", con.CONFIG_KEY_PATH)
                    )
                )
            credential = PemCertificateCredential(
                cert_path=cert_path, key_path=key_path, passphrase=passphrase
            )
        case _:
            raise ConfigurationError(
                ErrorMessages.Config.invalid_auth_method(method, con.AUTH_METHODS)
            )
    return AuthConfig(tenant_id=tenant_id, client_id=client_id, credential=credential)


def load_config_from_mapping(site: Mapping, base_dir: Optional[str] = None) -> AuthConfig:
    """
    Build an ``AuthConfig`` from one site entry of a sites configuration::

        auth_method: certificate_pfx
        general: {client_id: ..., tenant_id: ...}
        auth:
          certificate_pfx: {path: certs/app.pfx, passphrase: ...}

    Relative certificate paths resolve against ``base_dir``.
    """
    raw_method = site.get(con.CONFIG_AUTH_METHOD)
    if not raw_method:
        raise ConfigurationError(
            ErrorMessages.Config.required_value(con.CONFIG_AUTH_METHOD)
        )
    method = normalize_auth_method(raw_method)

    general = site.get(con.CONFIG_GENERAL) or {}
    tenant_id = general.get(con.CONFIG_TENANT_ID)
    client_id = general.get(con.CONFIG_CLIENT_ID)
    if not tenant_id:
        raise ConfigurationError(ErrorMessages.Config.required_value(con.CONFIG_TENANT_ID))
    if not client_id:
        raise ConfigurationError(ErrorMessages.Config.required_value(con.CONFIG_CLIENT_ID))
    verify_tenant(tenant_id, con.CONFIG_TENANT_ID)
    verify_guid(client_id, con.CONFIG_CLIENT_ID)

    auth_section = site.get(con.CONFIG_AUTH) or {}
    # The section may be keyed by the alias used in the file (e.g. certificate_crt)
    auth = auth_section.get(raw_method) or auth_section.get(method) or {}

    def _resolve(path):
        if path and base_dir and not os.path.isabs(path):
            return os.path.join(base_dir, path)
        return path

    return _build_config(
        tenant_id,
        client_id,
        method,
        secret=auth.get(con.CONFIG_SECRET),
        pfx_path=_resolve(auth.get(con.CONFIG_PATH)),
        cert_path=_resolve(auth.get(con.CONFIG_CERT_PATH)),
        key_path=_resolve(auth.get(con.CONFIG_KEY_PATH)),
        passphrase=auth.get(con.CONFIG_PASSPHRASE),
    )


def _read_sites_document(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as file:
            if path.lower().endswith(".json"):
                document = json.load(file)
            else:
                document = yaml.safe_load(file)
    except OSError as e:
        raise ConfigurationError(
            ErrorMessages.Config.config_file_unreadable(path, e.strerror or str(e))
        ) from e
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(
            ErrorMessages.Config.config_file_unreadable(path, str(e))
        ) from e

    if not isinstance(document, dict) or not isinstance(
        document.get(con.CONFIG_SITES), dict
    ):
        raise ConfigurationError(ErrorMessages.Config.config_file_invalid(path))

    return document[con.CONFIG_SITES]


def load_sites_config(path: str) -> dict[str, AuthConfig]:
    """Load every site of a JSON or YAML sites configuration file."""
    base_dir = os.path.dirname(os.path.abspath(path))
    return {
        name: load_config_from_mapping(site or {}, base_dir=base_dir)
        for name, site in _read_sites_document(path).items()
    }


def load_site_config(path: str, site: str) -> AuthConfig:
    """Load a single named site; other sites in the file are not validated."""
    sites = _read_sites_document(path)
    if site not in sites:
        raise ConfigurationError(
            ErrorMessages.Config.site_not_found(site, sorted(sites))
        )
    base_dir = os.path.dirname(os.path.abspath(path))
    return load_config_from_mapping(sites[site] or {}, base_dir=base_dir)
