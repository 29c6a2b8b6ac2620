"""errcode: standardized, hierarchical API error codes.

Clients can reliably understand errors by checking immutable error codes
rather than messages. A Code is never modified once released to clients;
create a new Code instead.

The main requirement is to satisfy the ErrorCode protocol by attaching a
Code to an error. HasClientData and HasOperation are optional protocols for
shaping the structured data sent to clients. Codes form a hierarchy, used to
inherit HTTP statuses from ancestors. JSONFormat is an opinion on how to send
an error to a client.
"""
from __future__ import annotations

from errcode.client import RemoteErrorCode, code_for_status, to_response
from errcode.code import SEPARATOR, Code, new_code
from errcode.codes import (
    INTERNAL_CODE,
    INVALID_INPUT_CODE,
    NOT_FOUND_CODE,
    ROOT_CODES,
    STATE_CODE,
)
from errcode.error_code import (
    CodedError,
    DomainError,
    ErrorCode,
    HasClientData,
    InternalError,
    InvalidInputError,
    NotFoundError,
    client_data,
    code_of,
    is_error_code,
    new_coded_error,
)
from errcode.exceptions import (
    DuplicateCodeError,
    DuplicateMetaDataError,
    ErrcodeError,
    ErrorContext,
    InvalidCodePathError,
    InvalidMetaDataError,
    RegistrationError,
    RegistrySealedError,
    TaxonomyError,
)
from errcode.http import (
    DEFAULT_HTTP_STATUS,
    http_status_of,
    seal_http_registry,
    set_http_status,
)
from errcode.json_format import (
    JSONFormat,
    new_json_format,
    operation_client_data,
    to_jsonable,
)
from errcode.metadata import MetaData
from errcode.operation import AddOp, EmbedOp, HasOperation, OpErrCode, op, operation_of
from errcode.taxonomy import CodeSpec, Taxonomy, TaxonomyManifest

__version__ = "0.1.0"

__all__ = [
    # Codes
    "Code",
    "SEPARATOR",
    "new_code",
    "INTERNAL_CODE",
    "INVALID_INPUT_CODE",
    "NOT_FOUND_CODE",
    "ROOT_CODES",
    "STATE_CODE",
    # Metadata
    "MetaData",
    "DEFAULT_HTTP_STATUS",
    "http_status_of",
    "seal_http_registry",
    "set_http_status",
    # Error codes
    "CodedError",
    "DomainError",
    "ErrorCode",
    "HasClientData",
    "InternalError",
    "InvalidInputError",
    "NotFoundError",
    "client_data",
    "code_of",
    "is_error_code",
    "new_coded_error",
    # Operations
    "AddOp",
    "EmbedOp",
    "HasOperation",
    "OpErrCode",
    "op",
    "operation_of",
    # Reporting
    "JSONFormat",
    "RemoteErrorCode",
    "code_for_status",
    "new_json_format",
    "operation_client_data",
    "to_jsonable",
    "to_response",
    # Taxonomy
    "CodeSpec",
    "Taxonomy",
    "TaxonomyManifest",
    # Failures
    "DuplicateCodeError",
    "DuplicateMetaDataError",
    "ErrcodeError",
    "ErrorContext",
    "InvalidCodePathError",
    "InvalidMetaDataError",
    "RegistrationError",
    "RegistrySealedError",
    "TaxonomyError",
    # Version
    "__version__",
]
