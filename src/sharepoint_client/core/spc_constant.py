# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

# Azure AD / Microsoft Graph
AUTHORITY_HOST = "https://login.microsoftonline.com"
TOKEN_ENDPOINT_PATH = "/{tenant_id}/oauth2/v2.0/token"
SCOPE_GRAPH_DEFAULT = "https://graph.microsoft.com/.default"
GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"
CLIENT_ASSERTION_TYPE_JWT_BEARER = (
    "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
DEFAULT_CONTENT_TYPE = "application/json"

# Token lifetimes (seconds)
ASSERTION_LIFETIME = 3600
DEFAULT_TOKEN_LIFETIME = 3600
TOKEN_EXPIRY_MARGIN = 30
TOKEN_REQUEST_TIMEOUT = 30

# Status used when the token endpoint produced no HTTP response at all
HTTP_STATUS_NO_RESPONSE = 0

# Authentication methods
AUTH_CLIENT_SECRET = "client_secret"
AUTH_CERTIFICATE_PFX = "certificate_pfx"
AUTH_CERTIFICATE_PEM = "certificate_pem"
AUTH_METHODS = [AUTH_CLIENT_SECRET, AUTH_CERTIFICATE_PFX, AUTH_CERTIFICATE_PEM]
AUTH_METHOD_ALIASES = {
    "secret": AUTH_CLIENT_SECRET,
    "pfx": AUTH_CERTIFICATE_PFX,
    "certificate_crt": AUTH_CERTIFICATE_PEM,
    "pem": AUTH_CERTIFICATE_PEM,
}

PFX_EXTENSIONS = (".pfx", ".p12")
PEM_CERT_EXTENSIONS = (".pem", ".crt", ".cer")

# Environment variables
SPC_TENANT_ID = "SPC_TENANT_ID"
SPC_CLIENT_ID = "SPC_CLIENT_ID"
SPC_AUTH_METHOD = "SPC_AUTH_METHOD"
SPC_CLIENT_SECRET = "SPC_CLIENT_SECRET"
SPC_PFX_PATH = "SPC_PFX_PATH"
SPC_CERT_PATH = "SPC_CERT_PATH"
SPC_KEY_PATH = "SPC_KEY_PATH"
SPC_CERT_PASSPHRASE = "SPC_CERT_PASSPHRASE"
SPC_DEBUG_ENABLED = "SPC_DEBUG_ENABLED"
SPC_LOG_FILE = "SPC_LOG_FILE"

# Config file keys
CONFIG_SITES = "sites"
CONFIG_GENERAL = "general"
CONFIG_AUTH = "auth"
CONFIG_AUTH_METHOD = "auth_method"
CONFIG_CLIENT_ID = "client_id"
CONFIG_TENANT_ID = "tenant_id"
CONFIG_SECRET = "secret"
CONFIG_PATH = "path"
CONFIG_CERT_PATH = "cert_path"
CONFIG_KEY_PATH = "key_path"
CONFIG_PASSPHRASE = "passphrase"

# Logging
LOGGER_NAME = "sharepoint_client"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

# Output
OUTPUT_FORMAT_TEXT = "text"
OUTPUT_FORMAT_JSON = "json"

# Error codes
ERROR_INVALID_CONFIGURATION = "InvalidConfiguration"
ERROR_CREDENTIAL_FILE_UNREADABLE = "CredentialFileUnreadable"
ERROR_INVALID_CREDENTIAL = "InvalidCredential"
ERROR_INVALID_CERTIFICATE = "InvalidCertificate"
ERROR_SIGNING_FAILED = "SigningFailed"
ERROR_AUTHENTICATION_FAILED = "AuthenticationFailed"
ERROR_INVALID_GUID = "InvalidGuid"
ERROR_OPERATION_CANCELLED = "OperationCancelled"
ERROR_UNEXPECTED_ERROR = "UnexpectedError"

# Exit codes (POSIX)
EXIT_CODE_SUCCESS = 0
EXIT_CODE_ERROR = 1
EXIT_CODE_CANCELLED_OR_MISUSE_BUILTINS = 2
EXIT_CODE_CANNOT_EXECUTE = 126
EXIT_CODE_COMMAND_NOT_FOUND = 127
