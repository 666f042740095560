# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
SharePoint Online client for Microsoft Graph.

The authentication core turns a client secret, a PKCS#12 archive or a PEM
certificate/key pair into bearer tokens for the Graph API. Public names are
resolved on first access so that importing the package (and the ``spc``
entry point) does not pull in ``requests``, ``jwt`` or ``cryptography``.
"""

import importlib

__version__ = "1.0.0"

_LAZY_EXPORTS = {
    "Authenticator": "sharepoint_client.core.spc_auth",
    "AuthConfig": "sharepoint_client.core.spc_config",
    "ClientSecretCredential": "sharepoint_client.core.spc_config",
    "PemCertificateCredential": "sharepoint_client.core.spc_config",
    "PfxCertificateCredential": "sharepoint_client.core.spc_config",
    "load_config_from_env": "sharepoint_client.core.spc_config",
    "load_sites_config": "sharepoint_client.core.spc_config",
}


def __getattr__(name):
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(importlib.import_module(module_path), name)


__all__ = ["__version__", *_LAZY_EXPORTS]
