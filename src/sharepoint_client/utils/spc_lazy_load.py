# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Lazy loading utilities for the spc command line.
Command modules (and with them requests, jwt and cryptography) are imported
only when the command is invoked, not while the parser is being built.
"""

import importlib


def lazy_command(module_path: str, func_name: str):
    """Create a lazy-loading wrapper for a command function.

    Args:
        module_path: Dotted Python module path, e.g. ``"sharepoint_client.commands.spc_auth_commands"``.
        func_name: Name of the callable inside *module_path*, e.g. ``"check_command"``.
    """

    def wrapper(args):
        mod = importlib.import_module(module_path)
        return getattr(mod, func_name)(args)

    return wrapper
