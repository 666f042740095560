# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from argparse import _SubParsersAction

from sharepoint_client.parsers.spc_global_params import add_global_flags
from sharepoint_client.utils.spc_lazy_load import lazy_command


def register_parser(subparsers: _SubParsersAction) -> None:
    cert_parser = subparsers.add_parser(
        "cert", help="Certificate utilities for Azure AD app registrations"
    )
    cert_subparsers = cert_parser.add_subparsers(dest="cert_command")

    thumbprint_parser = cert_subparsers.add_parser(
        "thumbprint",
        help="Print the x5t thumbprint of a PEM, DER or PKCS#12 certificate",
    )
    thumbprint_parser.add_argument("path", help="Certificate file path")
    thumbprint_parser.add_argument(
        "--passphrase",
        required=False,
        help="PKCS#12 archive password. Optional",
    )
    add_global_flags(thumbprint_parser)
    thumbprint_parser.set_defaults(
        func=lazy_command(
            "sharepoint_client.commands.spc_cert_commands", "thumbprint_command"
        )
    )

    cert_parser.set_defaults(func=lambda args: _show_help(cert_parser))


def _show_help(parser) -> int:
    parser.print_help()
    return 0
