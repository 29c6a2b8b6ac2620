"""
JSON envelope for ErrorCodes.

An opinion on how to send an error to a client::

    {"data": {...}, "msg": "...", "code": "state.blocked", "operation": "path.move"}

``msg`` is the error's ``str()``, ``code`` the full code path and ``data``
the client data (the error itself unless it defines ``get_client_data``).
``operation`` is omitted when empty. No help is given on versioning the data.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
)
from pydantic_core import to_jsonable_python

from errcode.error_code import ErrorCode, client_data
from errcode.operation import operation_of


def operation_client_data(err: ErrorCode) -> tuple[str, Any]:
    """Return the operation and the client data of *err*.

    The operation is read from *err* first. If it has none, it is read from
    the client data, which covers domain errors embedding their operation.
    """
    operation = operation_of(err)
    data = client_data(err)
    if not operation:
        operation = operation_of(data)
    return operation, data


def _jsonable_fallback(value: Any, seen: set[int]) -> Any:
    if isinstance(value, BaseException) and id(value) not in seen:
        fields = {k: v for k, v in vars(value).items() if not k.startswith("_")}
        if fields:
            seen.add(id(value))
            try:
                return _to_jsonable(fields, seen)
            finally:
                seen.discard(id(value))
    return str(value)


def _to_jsonable(data: Any, seen: set[int]) -> Any:
    return to_jsonable_python(
        data,
        bytes_mode="base64",
        fallback=lambda value: _jsonable_fallback(value, seen),
    )


def to_jsonable(data: Any) -> Any:
    """Convert client data to JSON-compatible values.

    Pydantic models and dataclasses are serialized by field, exceptions by
    their public attributes (or their message when they have none) and any
    other unknown object by ``str()``. Bytes are base64 encoded. An
    exception reached again through its own attributes renders as its
    message. Data that still cannot be serialized renders as ``str(data)``,
    so reporting an error never fails.
    """
    try:
        return _to_jsonable(data, set())
    except (ValueError, RecursionError):
        return str(data)


class JSONFormat(BaseModel):
    """Wire representation of an ErrorCode."""

    model_config = ConfigDict(frozen=True)

    data: Any = Field(default=None, description="Client data of the error")
    msg: str = Field(description="Human-readable message")
    code: str = Field(description="Full dot-separated code path")
    operation: str = Field(default="", description="Operation, omitted when empty")

    @field_validator("operation", mode="before")
    @classmethod
    def _none_operation(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_serializer("data")
    def _serialize_data(self, data: Any) -> Any:
        return to_jsonable(data)

    @model_serializer(mode="wrap")
    def _omit_empty_operation(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        payload = handler(self)
        if not payload.get("operation"):
            payload.pop("operation", None)
        return payload

    @classmethod
    def from_error_code(cls, err: ErrorCode) -> JSONFormat:
        """Build the envelope for *err*."""
        operation, data = operation_client_data(err)
        return cls(
            data=data,
            msg=str(err),
            code=err.code().code_str,
            operation=operation,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()


def new_json_format(err: ErrorCode) -> JSONFormat:
    """See :meth:`JSONFormat.from_error_code`."""
    return JSONFormat.from_error_code(err)
