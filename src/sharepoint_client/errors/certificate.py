# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class CertificateErrors:
    @staticmethod
    def file_unreadable(path: str, reason: str) -> str:
        return f"Unable to read credential file '{path}': {reason}"

    @staticmethod
    def pkcs12_unreadable() -> str:
        return (
            "Failed to read the PKCS#12 archive: the passphrase is wrong "
            "or the data is not a valid PKCS#12 file"
        )

    @staticmethod
    def pkcs12_missing_private_key() -> str:
        return "The PKCS#12 archive does not contain a private key"

    @staticmethod
    def pkcs12_missing_certificate() -> str:
        return "The PKCS#12 archive does not contain a certificate"

    @staticmethod
    def certificate_unreadable() -> str:
        return "Failed to parse the certificate in PEM or DER format"

    @staticmethod
    def private_key_unreadable() -> str:
        return (
            "Failed to load the private key: the passphrase is wrong or missing, "
            "or the data is not a valid PEM key"
        )

    @staticmethod
    def private_key_not_encrypted() -> str:
        return "A passphrase was given but the private key is not encrypted"
