# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from sharepoint_client.core import spc_constant as con


def add_global_flags(parser) -> None:
    """
    Add global flags that apply to all commands.

    Args:
        parser: The argparse parser to add flags to.
    """
    # Add format flag to override output format
    parser.add_argument(
        "--output_format",
        required=False,
        choices=[con.OUTPUT_FORMAT_JSON, con.OUTPUT_FORMAT_TEXT],
        help="Override output format type. Optional",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Write debug logs to stderr. Optional",
    )
    parser.add_argument(
        "--log_file",
        required=False,
        help="Also write debug logs to this file. Optional",
    )


def add_credential_source_flags(parser) -> None:
    """Flags selecting where the credential configuration comes from."""
    parser.add_argument(
        "--env-file",
        dest="env_file",
        required=False,
        help="dotenv file with SPC_* variables. Process variables take precedence",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        required=False,
        help="JSON or YAML sites configuration file",
    )
    parser.add_argument(
        "--site",
        required=False,
        default="default",
        help="Site entry to use from --config (default: %(default)s)",
    )
