# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class ConfigErrors:
    @staticmethod
    def required_value(name: str) -> str:
        return f"'{name}' is required"

    @staticmethod
    def invalid_auth_method(method: str, allowed: list) -> str:
        return f"Authentication method '{method}' is not valid. Allowed values: {', '.join(allowed)}"

    @staticmethod
    def ambiguous_credentials() -> str:
        return (
            "Exactly one of SPC_CLIENT_SECRET, SPC_PFX_PATH or SPC_CERT_PATH "
            "must be set"
        )

    @staticmethod
    def credential_required_for_method(name: str, method: str) -> str:
        return f"'{name}' is required for the '{method}' authentication method"

    @staticmethod
    def invalid_cert_path(parameter_name: str) -> str:
        return f"{parameter_name} does not point to an existing file"

    @staticmethod
    def invalid_cert_format(parameter_name: str, extensions: tuple) -> str:
        return f"{parameter_name} must have one of the extensions: {', '.join(extensions)}"

    @staticmethod
    def config_file_unreadable(path: str, reason: str) -> str:
        return f"Unable to read configuration file '{path}': {reason}"

    @staticmethod
    def config_file_invalid(path: str) -> str:
        return f"Configuration file '{path}' must contain a 'sites' mapping"

    @staticmethod
    def site_not_found(site: str, available: list) -> str:
        return f"No configuration found for site '{site}'. Available: {', '.join(available) or 'none'}"

    @staticmethod
    def unsupported_credential(type_name: str) -> str:
        return f"Unsupported credential type: {type_name}"
