"""Failures raised by errcode itself.

Provides a small layered hierarchy:
- ErrcodeError: Base class for all package failures
- RegistrationError: Programming mistakes found while building the code tree
- TaxonomyError: Taxonomy manifest loading/validation failures

Registration errors are meant to surface at process startup. Nothing in this
package catches them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Structured context attached to an ErrcodeError."""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the failure"""

    source: str | None = None
    """Failure source (e.g., 'code', 'metadata', 'taxonomy')"""

    hint: str | None = None
    """Actionable hint for fixing the failure"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class ErrcodeError(Exception):
    """Base class for all errcode failures.

    Attributes:
        message: Human-readable message
        context: Structured failure context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> ErrcodeError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class RegistrationError(ErrcodeError):
    """A code or its metadata was registered incorrectly.

    These are fatal: they describe a mistake in how the application declares
    its codes, not a runtime condition.
    """


class InvalidCodePathError(RegistrationError):
    """A code segment is empty or does not extend its parent.

    Raised when:
    - A root code contains the separator
    - A qualified child path does not name its parent
    - A segment is empty
    """

    def __init__(
        self,
        message: str,
        *,
        path: str,
        parent: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="code")
        ctx.details["path"] = path
        if parent is not None:
            ctx.details["parent"] = parent
        super().__init__(message, ctx)
        self.path = path
        self.parent = parent


class DuplicateMetaDataError(RegistrationError):
    """A second value was attached to the same code in one registry."""

    def __init__(
        self,
        message: str,
        *,
        registry: str,
        path: str,
        existing: Any,
    ) -> None:
        ctx = ErrorContext(
            source="metadata",
            details={"registry": registry, "path": path, "existing": existing},
        )
        super().__init__(message, ctx)
        self.registry = registry
        self.path = path
        self.existing = existing


class RegistrySealedError(RegistrationError):
    """A write was attempted after the registration phase ended."""

    def __init__(self, message: str, *, registry: str, path: str) -> None:
        ctx = ErrorContext(
            source="metadata",
            details={"registry": registry, "path": path},
            hint="register codes before sealing",
        )
        super().__init__(message, ctx)
        self.registry = registry
        self.path = path


class InvalidMetaDataError(RegistrationError):
    """A metadata value is not acceptable for its registry."""

    def __init__(self, message: str, *, path: str, value: Any) -> None:
        ctx = ErrorContext(source="metadata", details={"path": path, "value": value})
        super().__init__(message, ctx)
        self.path = path
        self.value = value


class TaxonomyError(ErrcodeError):
    """A taxonomy manifest could not be loaded or applied."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        manifest_path: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="taxonomy")
        if manifest_path:
            ctx.details["manifest_path"] = manifest_path
        super().__init__(message, ctx)
        self.manifest_path = manifest_path


class DuplicateCodeError(RegistrationError):
    """A code with the same full path was declared twice in one taxonomy."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, ErrorContext(source="taxonomy", details={"path": path}))
        self.path = path
