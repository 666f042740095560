# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import json
import sys
from typing import Any, Optional

from sharepoint_client.core import spc_constant as con


def _output_format(args) -> str:
    return getattr(args, "output_format", None) or con.OUTPUT_FORMAT_TEXT


def print(message: str = "") -> None:
    sys.stdout.write(f"{message}\n")
    sys.stdout.flush()


def print_warning(message: str) -> None:
    sys.stderr.write(f"! {message}\n")
    sys.stderr.flush()


def print_output_format(args, message: Optional[str] = None, data: Any = None) -> None:
    if _output_format(args) == con.OUTPUT_FORMAT_JSON:
        payload = {"status": "Success"}
        if message is not None:
            payload["message"] = message
        if data is not None:
            payload["result"] = data
        print(json.dumps(payload, indent=2, default=str))
        return

    if message is not None:
        print(message)
    if isinstance(data, dict):
        width = max((len(str(k)) for k in data), default=0)
        for key, value in data.items():
            print(f"{str(key).ljust(width)} : {value}")
    elif data is not None:
        print(str(data))


def print_output_error(error, output_format_type: Optional[str] = None) -> None:
    if output_format_type == con.OUTPUT_FORMAT_JSON:
        if hasattr(error, "to_dict"):
            payload = {"status": "Failure", "error": error.to_dict()}
        else:
            payload = {"status": "Failure", "error": {"message": str(error)}}
        sys.stderr.write(json.dumps(payload, indent=2, default=str) + "\n")
    else:
        if hasattr(error, "formatted_message"):
            text = error.formatted_message()
        else:
            text = str(error)
        sys.stderr.write(f"x {text}\n")
    sys.stderr.flush()


def print_version() -> None:
    from sharepoint_client import __version__

    print(f"spc {__version__}")
