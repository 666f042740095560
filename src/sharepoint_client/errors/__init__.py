# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from sharepoint_client.errors.auth import AuthErrors
from sharepoint_client.errors.certificate import CertificateErrors
from sharepoint_client.errors.common import CommonErrors
from sharepoint_client.errors.config import ConfigErrors


class ErrorMessages:
    Auth = AuthErrors
    Certificate = CertificateErrors
    Common = CommonErrors
    Config = ConfigErrors
