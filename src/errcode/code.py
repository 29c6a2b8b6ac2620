"""Hierarchical error codes.

A Code is a dot-separated path such as ``state.blocked``. Each Code stores
only its own segment and a reference to its parent; the full path is rebuilt
on demand and is the code's identity. Codes are created once while the
application registers its taxonomy and should never change after they have
been released to clients. Create a new Code instead.

Example:
    >>> STATE_CODE = Code.new("state")
    >>> PATH_BLOCKED_CODE = STATE_CODE.child("state.blocked")
    >>> PATH_BLOCKED_CODE.code_str
    'state.blocked'
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from errcode.exceptions import InvalidCodePathError
from errcode.telemetry import get_logger

if TYPE_CHECKING:
    from errcode.metadata import MetaData

SEPARATOR = "."

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Code:
    """An immutable node in the error code hierarchy.

    Equality and hashing use the full path, so two codes built
    independently with the same path are interchangeable.
    """

    segment: str
    """Local path component; never contains the separator."""

    parent: Code | None = None
    """Parent code, or None for a root."""

    def __post_init__(self) -> None:
        parent_str = self.parent.code_str if self.parent is not None else None
        if not self.segment:
            raise InvalidCodePathError(
                "code segment must not be empty", path=self.segment, parent=parent_str
            )
        if SEPARATOR in self.segment:
            raise InvalidCodePathError(
                f"expected no parent paths: {self.segment!r}",
                path=self.segment,
                parent=parent_str,
            )

    @classmethod
    def new(cls, segment: str) -> Code:
        """Create a top-level code.

        Most codes should be created from the hierarchy with :meth:`child`.

        Raises:
            InvalidCodePathError: If the segment contains the separator.
        """
        code = cls(segment)
        logger.debug("Root code registered", code=code.code_str)
        return code

    def child(self, child_str: str) -> Code:
        """Create a child of this code.

        For documentation purposes *child_str* may include the parent path,
        e.g. ``STATE_CODE.child("state.blocked")``. Only the last component is
        stored; the rest is supplied by the parent reference.

        Raises:
            InvalidCodePathError: If a qualified *child_str* does not name this
                code as its parent.
        """
        paths = child_str.split(SEPARATOR)
        if len(paths) > 1:
            parent_path = paths[-2]
            if parent_path != self.segment:
                raise InvalidCodePathError(
                    f"got {parent_path!r} but expected a path to parent "
                    f"{self.segment!r} for {child_str!r}",
                    path=child_str,
                    parent=self.code_str,
                )
        child = type(self)(paths[-1], parent=self)
        logger.debug("Child code registered", code=child.code_str)
        return child

    @classmethod
    def parse(cls, path: str) -> Code:
        """Rebuild a code chain from its full path.

        The result is detached from any registered taxonomy but compares
        equal to the registered code with the same path.
        """
        first, *rest = path.split(SEPARATOR)
        code = cls(first)
        for segment in rest:
            code = cls(segment, parent=code)
        return code

    @property
    def code_str(self) -> str:
        """The full dot-separated path. Use this for comparisons."""
        if self.parent is None:
            return self.segment
        return f"{self.parent.code_str}{SEPARATOR}{self.segment}"

    @property
    def root(self) -> Code:
        code = self
        while code.parent is not None:
            code = code.parent
        return code

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors()) - 1

    def ancestors(self) -> Iterator[Code]:
        """Iterate from this code up to its root, this code included."""
        code: Code | None = self
        while code is not None:
            yield code
            code = code.parent

    def find_ancestor(self, test: Callable[[Code], bool]) -> Code | None:
        """Return the nearest code in the chain (self included) passing *test*."""
        for code in self.ancestors():
            if test(code):
                return code
        return None

    def is_descendant_of(self, ancestor: Code) -> bool:
        """True if *ancestor* is this code or appears in its parent chain."""
        return self.find_ancestor(lambda an: an == ancestor) is not None

    def is_ancestor_of(self, descendant: Code) -> bool:
        """True if this code is *descendant* or appears in its parent chain."""
        return descendant.is_descendant_of(self)

    def attach_meta_data(self, registry: MetaData, value: Any) -> Code:
        """Register *value* for this code in *registry*. Returns self."""
        registry.attach(self, value)
        return self

    def meta_data_from_ancestors(self, registry: MetaData, default: Any = None) -> Any:
        """Look up metadata for this code, inheriting from the nearest ancestor."""
        return registry.from_ancestors(self, default)

    def set_http(self, status: int, registry: MetaData | None = None) -> Code:
        """Attach an HTTP status to this code. Returns self for chaining."""
        from errcode.http import set_http_status

        set_http_status(self, status, registry)
        return self

    def http_code(self, registry: MetaData | None = None) -> int:
        """The HTTP status of this code or its nearest ancestor, default 400."""
        from errcode.http import http_status_of

        return http_status_of(self, registry)

    def __str__(self) -> str:
        return self.code_str

    def __repr__(self) -> str:
        return f"Code({self.code_str!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Code):
            return NotImplemented
        return self.code_str == other.code_str

    def __hash__(self) -> int:
        return hash(self.code_str)


def new_code(segment: str) -> Code:
    """Create a top-level code. See :meth:`Code.new`."""
    return Code.new(segment)
