# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class CommonErrors:
    @staticmethod
    def invalid_guid(parameter_name: str) -> str:
        return f"{parameter_name} must be a valid GUID"

    @staticmethod
    def invalid_tenant(parameter_name: str) -> str:
        return f"{parameter_name} must be a GUID or a domain name"

    @staticmethod
    def unexpected_error() -> str:
        return "An unexpected error occurred"

    @staticmethod
    def operation_cancelled() -> str:
        return "Operation cancelled"
