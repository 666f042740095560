# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import base64
import os
from typing import Any, NamedTuple, Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from sharepoint_client.core import spc_logger
from sharepoint_client.core.spc_config import (
    PemCertificateCredential,
    PfxCertificateCredential,
)
from sharepoint_client.core.spc_exceptions import (
    ConfigurationError,
    CredentialFileError,
    InvalidCertificateError,
    InvalidCredentialError,
)
from sharepoint_client.core.spc_secure_material import SecureMaterial
from sharepoint_client.errors import ErrorMessages

_PEM_CERT_MARKER = b"-----BEGIN CERTIFICATE-----"
_PEM_CERT_END = b"-----END CERTIFICATE-----"


class CertificateMaterial(NamedTuple):
    certificate: x509.Certificate
    private_key: Any
    thumbprint: str


def _passphrase_bytes(passphrase: Optional[Union[str, bytes]]) -> Optional[bytes]:
    if passphrase is None or passphrase == "":
        return None
    if isinstance(passphrase, bytes):
        return passphrase
    return passphrase.encode("utf-8")


def read_credential_file(
    path: str, material: Optional[SecureMaterial] = None
) -> bytearray:
    """Read ``path`` directly into a ``bytearray``, tracked by ``material`` if given."""
    try:
        with open(path, "rb") as handle:
            size = os.fstat(handle.fileno()).st_size
            if material is None:
                buffer = bytearray(size)
            else:
                buffer = material.allocate_buffer(size)
            count = handle.readinto(buffer)
    except OSError as e:
        raise CredentialFileError(
            ErrorMessages.Certificate.file_unreadable(path, e.strerror or str(e)),
            path=path,
        ) from e
    del buffer[count:]
    return buffer


def load_pkcs12(data: Union[bytes, bytearray], passphrase=None) -> tuple:
    """
    Extract the certificate and private key from a PKCS#12 (PFX) archive.

    :param data: Raw archive bytes.
    :param passphrase: Archive password, if any.
    :return: Tuple of (certificate, private_key).
    """
    try:
        private_key, cert, _ = pkcs12.load_key_and_certificates(
            data, _passphrase_bytes(passphrase)
        )
    except (ValueError, TypeError) as ex:
        # The cause is kept for debugging; it never carries the password.
        raise InvalidCredentialError(
            ErrorMessages.Certificate.pkcs12_unreadable()
        ) from ex
    if not private_key:
        raise InvalidCredentialError(
            ErrorMessages.Certificate.pkcs12_missing_private_key()
        )
    if not cert:
        raise InvalidCredentialError(
            ErrorMessages.Certificate.pkcs12_missing_certificate()
        )
    return cert, private_key


def _certificate_bytes(data: Union[bytes, bytearray]) -> bytes:
    # Only the certificate block is copied; a bundled key stays in the buffer
    start = data.find(_PEM_CERT_MARKER)
    if start < 0:
        return bytes(data)
    end = data.find(_PEM_CERT_END, start)
    if end < 0:
        return bytes(data[start:])
    return bytes(data[start : end + len(_PEM_CERT_END)])


def load_x509_certificate(data: Union[bytes, bytearray, str]) -> x509.Certificate:
    if isinstance(data, str):
        data = data.encode("ascii", errors="replace")
    data = _certificate_bytes(data)
    try:
        if _PEM_CERT_MARKER in data:
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as ex:
        raise InvalidCertificateError(
            ErrorMessages.Certificate.certificate_unreadable()
        ) from ex


def load_pem(
    cert_data: Union[bytes, bytearray],
    key_data: Optional[Union[bytes, bytearray]] = None,
    passphrase=None,
) -> tuple:
    """Load a certificate and its PEM private key.

    When ``key_data`` is omitted the key is expected in the same PEM bundle as
    the certificate.
    """
    cert = load_x509_certificate(cert_data)
    key_source = cert_data if key_data is None else key_data
    try:
        private_key = serialization.load_pem_private_key(
            key_source, _passphrase_bytes(passphrase)
        )
    except TypeError as ex:
        # cryptography raises TypeError for a passphrase/encryption mismatch
        if passphrase:
            message = ErrorMessages.Certificate.private_key_not_encrypted()
        else:
            message = ErrorMessages.Certificate.private_key_unreadable()
        raise InvalidCredentialError(message) from ex
    except ValueError as ex:
        raise InvalidCredentialError(
            ErrorMessages.Certificate.private_key_unreadable()
        ) from ex
    return cert, private_key


def compute_thumbprint(certificate: Union[x509.Certificate, bytes, bytearray, str]) -> str:
    """
    Compute the ``x5t`` thumbprint Azure AD uses to identify a certificate:
    SHA-1 over the DER encoding, base64url without padding.

    :param certificate: A loaded certificate, PEM text/bytes or DER bytes.
    """
    if not isinstance(certificate, x509.Certificate):
        certificate = load_x509_certificate(certificate)
    digest = certificate.fingerprint(
        hashes.SHA1()
    )  # SHA-1 is mandated by the x5t header; it identifies the certificate only
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def load_certificate_material(
    credential: Union[PfxCertificateCredential, PemCertificateCredential],
    material: SecureMaterial,
) -> CertificateMaterial:
    """Read, decrypt and fingerprint the configured certificate credential.

    Every byte buffer read along the way is registered with ``material``; the
    caller owns its release.
    """
    if isinstance(credential, PfxCertificateCredential):
        if credential.data is not None:
            data = material.register_buffer(credential.data)
        elif credential.path:
            spc_logger.log_debug(f"Loading PKCS#12 credential from {credential.path}")
            data = read_credential_file(credential.path, material)
        else:
            raise ConfigurationError(
                ErrorMessages.Auth.certificate_source_missing("PKCS#12")
            )
        cert, private_key = load_pkcs12(data, credential.passphrase)

    elif isinstance(credential, PemCertificateCredential):
        if credential.cert_data is not None:
            cert_data = material.register_buffer(credential.cert_data)
        elif credential.cert_path:
            spc_logger.log_debug(f"Loading PEM certificate from {credential.cert_path}")
            cert_data = read_credential_file(credential.cert_path, material)
        else:
            raise ConfigurationError(
                ErrorMessages.Auth.certificate_source_missing("certificate")
            )

        key_data = None
        if credential.key_data is not None:
            key_data = material.register_buffer(credential.key_data)
        elif credential.key_path:
            key_data = read_credential_file(credential.key_path, material)
        cert, private_key = load_pem(cert_data, key_data, credential.passphrase)

    else:
        raise ConfigurationError(
            ErrorMessages.Config.unsupported_credential(type(credential).__name__)
        )

    return CertificateMaterial(cert, private_key, compute_thumbprint(cert))
