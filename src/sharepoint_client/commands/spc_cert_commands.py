# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from argparse import Namespace
from binascii import hexlify

from cryptography.hazmat.primitives import hashes

from sharepoint_client.core import spc_constant as con
from sharepoint_client.core.spc_certificate import (
    compute_thumbprint,
    load_pkcs12,
    load_x509_certificate,
    read_credential_file,
)
from sharepoint_client.core.spc_secure_material import SecureMaterial
from sharepoint_client.utils import spc_ui


def thumbprint_command(args: Namespace) -> int:
    with SecureMaterial() as material:
        data = read_credential_file(args.path, material)
        if args.path.lower().endswith(con.PFX_EXTENSIONS):
            cert, _ = load_pkcs12(data, args.passphrase)
        else:
            cert = load_x509_certificate(data)

    result = {
        "subject": cert.subject.rfc4514_string(),
        "thumbprint": hexlify(cert.fingerprint(hashes.SHA1())).decode("utf-8").upper(),
        "x5t": compute_thumbprint(cert),
    }
    spc_ui.print_output_format(args, data=result)
    return con.EXIT_CODE_SUCCESS
