# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from argparse import Namespace
from datetime import datetime, timezone

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core.spc_auth import Authenticator
from sharepoint_client.core.spc_config import (
    AuthConfig,
    load_config_from_env,
    load_site_config,
)
from sharepoint_client.core.spc_logger import mask_secret
from sharepoint_client.utils import spc_ui


def resolve_config(args: Namespace) -> AuthConfig:
    if getattr(args, "config_file", None):
        return load_site_config(args.config_file, args.site)
    return load_config_from_env(env_file=getattr(args, "env_file", None))


def _format_expiry(expires_on) -> str:
    if expires_on is None:
        return "-"
    return datetime.fromtimestamp(expires_on, tz=timezone.utc).isoformat()


def check_command(args: Namespace) -> int:
    config = resolve_config(args)
    with Authenticator(config) as authenticator:
        token = authenticator.get_access_token()
        info = authenticator.get_auth_info()

    result = {
        "method": info["method"],
        "tenant_id": info["tenant_id"],
        "client_id": info["client_id"],
        "expires_on": _format_expiry(info["expires_on"]),
        "token": token if args.show_token else mask_secret(token),
    }
    spc_ui.print_output_format(
        args, message="Access token acquired successfully", data=result
    )
    return con.EXIT_CODE_SUCCESS


def info_command(args: Namespace) -> int:
    config = resolve_config(args)
    authenticator = Authenticator(config)
    info = authenticator.get_auth_info()
    info["token_endpoint"] = config.token_endpoint
    info["scope"] = config.scope
    spc_ui.print_output_format(args, data=info)
    return con.EXIT_CODE_SUCCESS
