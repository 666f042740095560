# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import argparse
import os
import signal
import sys

import argcomplete

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core import spc_logger
from sharepoint_client.core.spc_exceptions import (
    AuthenticationError,
    SharePointClientError,
)
from sharepoint_client.errors import ErrorMessages
from sharepoint_client.parsers import spc_auth_parser as auth_parser
from sharepoint_client.parsers import spc_cert_parser as cert_parser
from sharepoint_client.utils import spc_ui


# POSIX-compliant signal handler
def _signal_handler(signum, frame):
    """
    Handle POSIX signals gracefully.

    Args:
        signum: Signal number
        frame: Current stack frame
    """
    signal_names = {
        signal.SIGINT: "SIGINT",
        signal.SIGTERM: "SIGTERM",
    }
    if hasattr(signal, "SIGHUP"):
        signal_names[signal.SIGHUP] = "SIGHUP"
    if hasattr(signal, "SIGQUIT"):
        signal_names[signal.SIGQUIT] = "SIGQUIT"

    signal_name = signal_names.get(signum, f"Signal {signum}")

    sys.stderr.write(f"\n{signal_name} received, exiting gracefully...\n")
    sys.stderr.flush()

    # Exit with 128 + signal number (POSIX convention)
    sys.exit(128 + signum)


def _setup_signal_handlers():
    """
    Setup POSIX-compliant signal handlers.
    Handles SIGINT, SIGTERM, SIGHUP, and SIGQUIT.
    """
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    # SIGQUIT and SIGHUP only exist on Unix-like systems
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, _signal_handler)
    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, _signal_handler)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spc",
        description="SharePoint Online client for Microsoft Graph",
    )
    parser.add_argument(
        "-v",
        "-V",
        "--version",
        dest="version",
        action="store_true",
        help="Show the version and exit",
    )
    subparsers = parser.add_subparsers(dest="command")
    auth_parser.register_parser(subparsers)
    cert_parser.register_parser(subparsers)
    return parser


def _configure_logging(args) -> None:
    debug = getattr(args, "debug", False) or os.environ.get(
        con.SPC_DEBUG_ENABLED, ""
    ).lower() in ["true", "1"]
    log_file = getattr(args, "log_file", None) or os.environ.get(con.SPC_LOG_FILE)
    spc_logger.configure_logging(debug=debug, log_file=log_file)


def main(argv=None):
    _setup_signal_handlers()

    parser = get_parser()
    argcomplete.autocomplete(parser, default_completer=None)
    args = parser.parse_args(argv)

    try:
        _configure_logging(args)

        if args.version:
            spc_ui.print_version()
            sys.exit(con.EXIT_CODE_SUCCESS)

        if not args.command:
            parser.print_help()
            sys.exit(con.EXIT_CODE_CANCELLED_OR_MISUSE_BUILTINS)

        exit_code = args.func(args)
        sys.exit(exit_code or con.EXIT_CODE_SUCCESS)

    except KeyboardInterrupt:
        _handle_keyboard_interrupt(args)
    except AuthenticationError as err:
        spc_ui.print_output_error(err, output_format_type=_output_format(args))
        sys.exit(con.EXIT_CODE_CANNOT_EXECUTE)
    except SharePointClientError as err:
        spc_ui.print_output_error(err, output_format_type=_output_format(args))
        sys.exit(con.EXIT_CODE_ERROR)
    except Exception as err:
        _handle_unexpected_error(err, args)


def _output_format(args):
    return getattr(args, "output_format", None)


def _handle_keyboard_interrupt(args):
    """Handle KeyboardInterrupt with proper error formatting."""
    spc_ui.print_output_error(
        SharePointClientError(
            ErrorMessages.Common.operation_cancelled(),
            con.ERROR_OPERATION_CANCELLED,
        ),
        output_format_type=_output_format(args),
    )
    sys.exit(con.EXIT_CODE_CANCELLED_OR_MISUSE_BUILTINS)


def _handle_unexpected_error(err, args):
    """Handle unexpected errors with proper error formatting."""
    spc_logger.log_debug(f"Unexpected error: {type(err).__name__}: {err}")
    error_message = str(err.args[0]) if err.args else ErrorMessages.Common.unexpected_error()

    spc_ui.print_output_error(
        SharePointClientError(error_message, con.ERROR_UNEXPECTED_ERROR),
        output_format_type=_output_format(args),
    )
    sys.exit(con.EXIT_CODE_ERROR)


if __name__ == "__main__":
    main()
