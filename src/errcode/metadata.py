"""
Metadata registries for codes.

A MetaData registry maps a code's full path to an arbitrary value and is
queried with ancestor fallback, so a specific code inherits the value of
its nearest registered ancestor. This is how HTTP statuses are attached.

Registries have two phases: values are attached while the application
declares its codes, then the registry is sealed and only read.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from errcode.code import Code
from errcode.exceptions import DuplicateMetaDataError, RegistrySealedError
from errcode.telemetry import get_logger

logger = get_logger(__name__)


class MetaData:
    """Registry of values keyed by full code path.

    Example:
        >>> retry_hints = MetaData("retry")
        >>> STATE_CODE.attach_meta_data(retry_hints, False)
        >>> STATE_CODE.child("state.blocked").meta_data_from_ancestors(retry_hints)
        False
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._values: dict[str, Any] = {}
        self._sealed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def sealed(self) -> bool:
        return self._sealed

    def attach(self, code: Code, value: Any) -> None:
        """Register *value* under the full path of *code*.

        Raises:
            RegistrySealedError: If the registry was sealed.
            DuplicateMetaDataError: If the path already has a value. The
                existing value is kept.
        """
        path = code.code_str
        if self._sealed:
            raise RegistrySealedError(
                f"{self._name} metadata is sealed, cannot attach to {path!r}",
                registry=self._name,
                path=path,
            )
        if path in self._values:
            existing = self._values[path]
            raise DuplicateMetaDataError(
                f"{self._name} metadata already exists {existing!r} for {path!r}",
                registry=self._name,
                path=path,
                existing=existing,
            )
        self._values[path] = value
        logger.debug("Metadata attached", registry=self._name, code=path, value=value)

    def get(self, code: Code | str, default: Any = None) -> Any:
        """Exact lookup, without ancestor fallback."""
        path = code.code_str if isinstance(code, Code) else code
        return self._values.get(path, default)

    def from_ancestors(self, code: Code, default: Any = None) -> Any:
        """Return the value of *code* or of its nearest registered ancestor."""
        for ancestor in code.ancestors():
            path = ancestor.code_str
            if path in self._values:
                return self._values[path]
        return default

    def seal(self) -> None:
        """End the registration phase. Later writes raise RegistrySealedError."""
        if not self._sealed:
            self._sealed = True
            logger.debug("Metadata sealed", registry=self._name, entries=len(self._values))

    def __contains__(self, code: object) -> bool:
        if isinstance(code, Code):
            return code.code_str in self._values
        return code in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"MetaData({self._name!r}, entries={len(self._values)}, sealed={self._sealed})"
