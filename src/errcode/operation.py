"""Operations: what was being done when an error occurred.

The relationship to codes is not one-to-one. A code can be produced by
several operations, and one operation can produce several codes. An error
can expose its operation by implementing :class:`HasOperation`, by embedding
:class:`EmbedOp`, or by being wrapped in :class:`OpErrCode`::

    op = errcode.op("path.move.x")
    if start < obstacle < end:
        raise op.add_to(PathBlocked(start, end, obstacle))

Read the operation with :func:`operation_of`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from errcode.code import Code
from errcode.error_code import ErrorCode, client_data


@runtime_checkable
class HasOperation(Protocol):
    """Retrieves the operation that was in progress during an error."""

    def get_operation(self) -> str: ...


def operation_of(value: Any) -> str:
    """The operation of *value*, or an empty string if it has none."""
    if isinstance(value, HasOperation):
        return value.get_operation() or ""
    return ""


@dataclass(kw_only=True)
class EmbedOp:
    """Mixin for error dataclasses that carry their own operation."""

    op: str = ""

    def get_operation(self) -> str:
        return self.op


class OpErrCode(Exception):
    """An ErrorCode with an operation attached.

    The code and client data are those of the wrapped error; the message is
    prefixed with the operation.
    """

    def __init__(self, operation: str, err: ErrorCode) -> None:
        super().__init__(operation, err)
        self.operation = operation
        self.err = err
        if isinstance(err, BaseException):
            self.__cause__ = err

    def get_operation(self) -> str:
        return self.operation

    def code(self) -> Code:
        return self.err.code()

    def get_client_data(self) -> Any:
        return client_data(self.err)

    def __str__(self) -> str:
        return f"{self.operation}: {self.err}"

    def __repr__(self) -> str:
        return f"OpErrCode({self.operation!r}, {self.err!r})"


class AddOp:
    """Adds a fixed operation to ErrorCodes. Constructed by :func:`op`."""

    __slots__ = ("operation",)

    def __init__(self, operation: str) -> None:
        self.operation = operation

    def add_to(self, err: ErrorCode) -> OpErrCode:
        return OpErrCode(self.operation, err)

    def __call__(self, err: ErrorCode) -> OpErrCode:
        return self.add_to(err)

    def __repr__(self) -> str:
        return f"AddOp({self.operation!r})"


def op(operation: str) -> AddOp:
    """Build an operation once and reuse it for every error of an action."""
    return AddOp(operation)
