"""
HTTP helpers for both sides of the wire.

``to_response`` turns an ErrorCode into an ``httpx.Response`` with the
inherited HTTP status and the JSON envelope as body (useful for
``httpx.MockTransport`` handlers and ASGI shims). ``RemoteErrorCode``
decodes such a response back into an ErrorCode so clients can switch on
the code.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from errcode.code import Code
from errcode.codes import INTERNAL_CODE, INVALID_INPUT_CODE, NOT_FOUND_CODE
from errcode.error_code import ErrorCode
from errcode.exceptions import InvalidCodePathError
from errcode.json_format import JSONFormat
from errcode.metadata import MetaData


def to_response(err: ErrorCode, registry: MetaData | None = None) -> httpx.Response:
    """Build the HTTP response reporting *err*."""
    return httpx.Response(
        err.code().http_code(registry),
        json=JSONFormat.from_error_code(err).to_dict(),
    )


def code_for_status(status_code: int) -> Code:
    """Generic code for a response that carries no envelope."""
    if status_code == httpx.codes.NOT_FOUND:
        return NOT_FOUND_CODE
    if status_code >= 500:
        return INTERNAL_CODE
    return INVALID_INPUT_CODE


class RemoteErrorCode(Exception):
    """An error decoded from a JSON envelope.

    Satisfies ErrorCode, HasClientData and HasOperation, so it can be
    re-reported or wrapped like a local error.

    Attributes:
        envelope: The decoded envelope
        status_code: HTTP status the envelope arrived with
        request_id: Request ID header, when the server sent one
    """

    def __init__(
        self,
        envelope: JSONFormat,
        *,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(envelope.msg)
        self.envelope = envelope
        self.status_code = status_code
        self.request_id = request_id
        self._code = Code.parse(envelope.code)

    def code(self) -> Code:
        return self._code

    def get_client_data(self) -> Any:
        return self.envelope.data

    def get_operation(self) -> str:
        return self.envelope.operation

    def __str__(self) -> str:
        return self.envelope.msg

    @classmethod
    def from_response(cls, response: httpx.Response) -> RemoteErrorCode:
        """Decode an error response.

        A body that is not a valid envelope yields a generic code derived
        from the status, with the raw body as data.
        """
        status = response.status_code
        request_id = response.headers.get("x-request-id") or response.headers.get("request-id")

        try:
            body: Any = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            try:
                return cls(
                    JSONFormat.model_validate(body),
                    status_code=status,
                    request_id=request_id,
                )
            except (ValidationError, InvalidCodePathError):
                pass

        envelope = JSONFormat(
            data=body if body is not None else response.text or None,
            msg=response.reason_phrase or f"HTTP {status}",
            code=code_for_status(status).code_str,
        )
        return cls(envelope, status_code=status, request_id=request_id)
