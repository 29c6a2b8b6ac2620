"""ErrorCode: an error with an attached Code.

Any value with a ``code()`` method returning a :class:`~errcode.code.Code`
and a message (its ``str()``) satisfies :class:`ErrorCode`. Errors do not
have to inherit from anything here. For an application error with a 1:1
mapping between an error type and a code, implement ``code()`` directly (or
subclass :class:`DomainError`)::

    @dataclass(eq=False)
    class PathBlocked(DomainError):
        error_code = STATE_CODE.child("state.blocked")

        start: int
        end: int
        obstacle: int

        def __str__(self) -> str:
            return f"The path {self.start} -> {self.end} has obstacle {self.obstacle}"

:class:`CodedError` is for generic errors that wrap many different underlying
errors with similar codes. The derived kinds :class:`InvalidInputError`,
:class:`NotFoundError` and :class:`InternalError` are the classification
step for errors that have no code of their own.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from errcode.code import Code
from errcode.codes import INTERNAL_CODE, INVALID_INPUT_CODE, NOT_FOUND_CODE


@runtime_checkable
class ErrorCode(Protocol):
    """An error whose message is its ``str()`` and which carries a Code."""

    def code(self) -> Code: ...


@runtime_checkable
class HasClientData(Protocol):
    """Defines the data portion of an ErrorCode returned to the client.

    Without it the ErrorCode itself is the data. Read it with
    :func:`client_data` rather than calling ``get_client_data`` directly.
    """

    def get_client_data(self) -> Any: ...


def code_of(value: Any) -> Code | None:
    """Return the Code of *value* if it satisfies ErrorCode, else None."""
    if not isinstance(value, ErrorCode):
        return None
    getter = value.code
    if not callable(getter):
        return None
    code = getter()
    return code if isinstance(code, Code) else None


def is_error_code(value: Any) -> bool:
    return code_of(value) is not None


def client_data(err: Any) -> Any:
    """The client-visible data of *err*: its ``get_client_data()`` or itself."""
    if isinstance(err, HasClientData):
        return err.get_client_data()
    return err


class DomainError(Exception):
    """Base for application errors mapped 1:1 to a code.

    Subclasses set the ``error_code`` class attribute.
    """

    error_code: ClassVar[Code]

    def code(self) -> Code:
        return type(self).error_code


class CodedError(Exception):
    """Attaches a code to an arbitrary error.

    The wrapped error is the message source, the client data (unless it
    defines its own) and the ``__cause__``.

    Attributes:
        err: The wrapped error
    """

    def __init__(self, err: BaseException, code: Code) -> None:
        super().__init__(err, code)
        self.err = err
        self._code = code
        self.__cause__ = err

    @classmethod
    def wrap(cls, err: BaseException, code: Code) -> CodedError:
        """Attach a broad *code* to *err*.

        If *err* is already an ErrorCode its own code is used instead, so the
        most specific code wins. Use this for broad error kinds (e.g. those
        representing HTTP statuses) with many underlying errors.
        """
        own = code_of(err)
        return CodedError(err, own if own is not None else code)

    def code(self) -> Code:
        return self._code

    def get_client_data(self) -> Any:
        """Client data of the wrapped ErrorCode, else the wrapped error."""
        if is_error_code(self.err):
            return client_data(self.err)
        return self.err

    def __str__(self) -> str:
        return str(self.err)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.err!r}, code={self._code.code_str!r})"


def new_coded_error(err: BaseException, code: Code) -> CodedError:
    """See :meth:`CodedError.wrap`."""
    return CodedError.wrap(err, code)


class InvalidInputError(CodedError):
    """Uses the error's own code if it has one, else ``input`` (HTTP 400)."""

    def __init__(self, err: BaseException) -> None:
        own = code_of(err)
        super().__init__(err, own if own is not None else INVALID_INPUT_CODE)


class NotFoundError(CodedError):
    """Uses the error's own code if it has one, else ``missing`` (HTTP 404)."""

    def __init__(self, err: BaseException) -> None:
        own = code_of(err)
        super().__init__(err, own if own is not None else NOT_FOUND_CODE)


class InternalError(CodedError):
    """Always reports an ``internal`` code (HTTP 500 unless overridden).

    The error's own code is kept only when it is ``internal`` or one of its
    descendants, so the intent of a 5xx is never lost and unrelated codes
    are not exposed through the internal channel.
    """

    def __init__(self, err: BaseException) -> None:
        code = INTERNAL_CODE
        own = code_of(err)
        if own is not None and own.is_descendant_of(INTERNAL_CODE):
            code = own
        super().__init__(err, code)
