"""HTTP status metadata for codes.

Statuses are inherited: a code without its own status uses the status of its
nearest ancestor, and 400 Bad Request when no ancestor has one.
"""

from __future__ import annotations

import httpx

from errcode.code import Code
from errcode.exceptions import InvalidMetaDataError
from errcode.metadata import MetaData

DEFAULT_HTTP_STATUS: int = int(httpx.codes.BAD_REQUEST)

HTTP_STATUS = MetaData("http")
"""Registry used when no explicit registry is passed."""


def _registry(registry: MetaData | None) -> MetaData:
    return HTTP_STATUS if registry is None else registry


def set_http_status(code: Code, status: int, registry: MetaData | None = None) -> None:
    """Attach an HTTP status to *code*.

    Raises:
        InvalidMetaDataError: If *status* is not an HTTP status code.
        DuplicateMetaDataError: If *code* already has a status.
    """
    if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
        raise InvalidMetaDataError(
            f"invalid HTTP status {status!r} for {code.code_str!r}",
            path=code.code_str,
            value=status,
        )
    _registry(registry).attach(code, int(status))


def http_status_of(code: Code, registry: MetaData | None = None) -> int:
    """The HTTP status for *code* or its first ancestor with one."""
    status = _registry(registry).from_ancestors(code)
    if status is None:
        return DEFAULT_HTTP_STATUS
    return status


def seal_http_registry() -> None:
    """Seal the default HTTP registry once all codes are declared."""
    HTTP_STATUS.seal()
