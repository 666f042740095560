# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class AuthErrors:
    @staticmethod
    def client_secret_missing() -> str:
        return "Client secret is not configured"

    @staticmethod
    def certificate_source_missing(kind: str) -> str:
        return f"No {kind} source configured. Provide either a file path or the raw bytes"

    @staticmethod
    def token_request_failed(http_status: int, body: str) -> str:
        return f"Token request failed: HTTP {http_status} - {body}"

    @staticmethod
    def token_request_timeout(timeout: float) -> str:
        return f"Token request timed out after {timeout} seconds"

    @staticmethod
    def token_request_network_error(reason: str) -> str:
        return f"Token request failed due to a network error: {reason}"

    @staticmethod
    def invalid_token_response() -> str:
        return "Token endpoint returned a response that is not valid JSON"

    @staticmethod
    def token_missing_in_response() -> str:
        return "Token response does not contain an access_token"

    @staticmethod
    def exchange_credential_required() -> str:
        return "Exactly one of client_secret or client_assertion must be provided"

    @staticmethod
    def assertion_signing_failed(reason: str) -> str:
        return f"Failed to sign the client assertion: {reason}"

    @staticmethod
    def unsupported_key_type(key_type: str) -> str:
        return f"Client assertions require an RSA private key, got {key_type}"
