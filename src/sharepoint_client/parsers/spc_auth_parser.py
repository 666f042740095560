# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from argparse import _SubParsersAction

from sharepoint_client.parsers.spc_global_params import (
    add_credential_source_flags,
    add_global_flags,
)
from sharepoint_client.utils.spc_lazy_load import lazy_command


def register_parser(subparsers: _SubParsersAction) -> None:
    auth_parser = subparsers.add_parser(
        "auth", help="Check and inspect the configured Azure AD credentials"
    )
    auth_subparsers = auth_parser.add_subparsers(dest="auth_command")

    check_parser = auth_subparsers.add_parser(
        "check",
        help="Acquire a Graph access token with the configured credentials",
    )
    add_credential_source_flags(check_parser)
    add_global_flags(check_parser)
    check_parser.add_argument(
        "--show-token",
        dest="show_token",
        action="store_true",
        default=False,
        help="Print the access token. Optional",
    )
    check_parser.set_defaults(
        func=lazy_command("sharepoint_client.commands.spc_auth_commands", "check_command")
    )

    info_parser = auth_subparsers.add_parser(
        "info", help="Show the configured authentication method without network access"
    )
    add_credential_source_flags(info_parser)
    add_global_flags(info_parser)
    info_parser.set_defaults(
        func=lazy_command("sharepoint_client.commands.spc_auth_commands", "info_command")
    )

    auth_parser.set_defaults(func=lambda args: show_help(auth_parser))


def show_help(parser) -> int:
    parser.print_help()
    return 0
