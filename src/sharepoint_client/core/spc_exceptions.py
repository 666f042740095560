# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from typing import Optional

from sharepoint_client.core import spc_constant as con


class SharePointClientError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def formatted_message(self, verbose=False):
        escaped = self.message.replace("\n", " ").strip()
        if verbose and self.__cause__ is not None:
            escaped = f"{escaped} ({type(self.__cause__).__name__}: {self.__cause__})"
        if self.status_code:
            return f"[{self.status_code}] {escaped}"
        return escaped

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "code": self.status_code,
            "type": type(self).__name__,
        }


class ConfigurationError(SharePointClientError):
    """Missing or invalid credential configuration."""

    def __init__(self, message, status_code=con.ERROR_INVALID_CONFIGURATION):
        super().__init__(message, status_code)


class CredentialFileError(SharePointClientError):
    """A credential file (PKCS#12, certificate or key) could not be read."""

    def __init__(self, message, path: Optional[str] = None):
        super().__init__(message, con.ERROR_CREDENTIAL_FILE_UNREADABLE)
        self.path = path


class InvalidCredentialError(SharePointClientError):
    """Wrong passphrase or malformed PKCS#12 archive / private key."""

    def __init__(self, message):
        super().__init__(message, con.ERROR_INVALID_CREDENTIAL)


class InvalidCertificateError(SharePointClientError):
    def __init__(self, message):
        super().__init__(message, con.ERROR_INVALID_CERTIFICATE)


class SigningError(SharePointClientError):
    def __init__(self, message):
        super().__init__(message, con.ERROR_SIGNING_FAILED)


class AuthenticationError(SharePointClientError):
    """The token endpoint refused the request or could not be reached.

    ``http_status`` is the HTTP status code of the response, or
    ``HTTP_STATUS_NO_RESPONSE`` when the request never produced one.
    ``response_body`` is kept verbatim for diagnostics.
    """

    def __init__(
        self,
        message,
        http_status: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message, con.ERROR_AUTHENTICATION_FAILED)
        self.http_status = http_status
        self.response_body = response_body

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["http_status"] = self.http_status
        return data
