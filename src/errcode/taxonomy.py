"""
Declarative code taxonomies.

A Taxonomy owns the codes of a service and the HTTP registry they resolve
statuses from. Codes are added during startup, either in code or from a
YAML/JSON manifest, and the taxonomy is then sealed::

    codes:
      - code: state.blocked
        http_status: 409
        description: The path has an obstacle.
      - code: state.blocked.permanent

The four generic roots (``internal``, ``input``, ``missing``, ``state``) are
always present.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errcode.code import SEPARATOR, Code
from errcode.codes import ROOT_CODES
from errcode.exceptions import (
    DuplicateCodeError,
    InvalidCodePathError,
    RegistrationError,
    RegistrySealedError,
    TaxonomyError,
)
from errcode.http import http_status_of, set_http_status
from errcode.metadata import MetaData
from errcode.telemetry import get_logger

logger = get_logger(__name__)

TAXONOMY_ENV = "ERRCODE_TAXONOMY"


class CodeSpec(BaseModel):
    """One code declaration in a manifest."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(description="Full dot-separated code path")
    http_status: int | None = Field(
        default=None, ge=100, le=599, description="HTTP status, inherited when omitted"
    )
    description: str | None = Field(default=None, description="What the code means")


class TaxonomyManifest(BaseModel):
    """A list of code declarations."""

    model_config = ConfigDict(extra="allow")

    codes: list[CodeSpec] = Field(default_factory=list)


class Taxonomy:
    """The codes of a service and their HTTP statuses.

    Example:
        >>> taxonomy = Taxonomy()
        >>> blocked = taxonomy.add("state.blocked", http_status=409)
        >>> permanent = taxonomy.add("state.blocked.permanent")
        >>> taxonomy.seal()
        >>> taxonomy.http_status(permanent)
        409
    """

    def __init__(self, registry: MetaData | None = None) -> None:
        """Initialize with the generic roots.

        Args:
            registry: HTTP registry to register statuses in. A fresh one is
                created by default, seeded with the statuses of the roots.
        """
        self._registry = registry if registry is not None else MetaData("http")
        self._codes: dict[str, Code] = {}
        self._descriptions: dict[str, str] = {}
        self._sealed = False
        for root in ROOT_CODES:
            self._codes[root.code_str] = root
            if root not in self._registry:
                set_http_status(root, http_status_of(root), self._registry)

    @property
    def registry(self) -> MetaData:
        return self._registry

    @property
    def sealed(self) -> bool:
        return self._sealed

    def add(
        self,
        path: str,
        http_status: int | None = None,
        description: str | None = None,
    ) -> Code:
        """Declare a code by its full path.

        The parent of a child path must already be declared.

        Raises:
            RegistrySealedError: If the taxonomy is sealed.
            DuplicateCodeError: If the path is already declared.
            InvalidCodePathError: If the parent is unknown or the path is
                malformed.
        """
        if self._sealed:
            raise RegistrySealedError(
                f"taxonomy is sealed, cannot add {path!r}", registry="taxonomy", path=path
            )
        if path in self._codes:
            raise DuplicateCodeError(f"code {path!r} already declared", path=path)

        parent_path, _, _ = path.rpartition(SEPARATOR)
        if parent_path:
            parent = self._codes.get(parent_path)
            if parent is None:
                raise InvalidCodePathError(
                    f"parent {parent_path!r} of {path!r} is not declared",
                    path=path,
                    parent=parent_path,
                )
            code = parent.child(path)
        else:
            code = Code.new(path)

        if http_status is not None:
            set_http_status(code, http_status, self._registry)
        self._codes[code.code_str] = code
        if description:
            self._descriptions[code.code_str] = description
        return code

    def get(self, path: str) -> Code | None:
        return self._codes.get(path)

    def describe(self, code: Code | str) -> str | None:
        path = code.code_str if isinstance(code, Code) else code
        return self._descriptions.get(path)

    def http_status(self, code: Code | str) -> int:
        """Inherited HTTP status of a code or path, using this taxonomy's registry."""
        if isinstance(code, str):
            code = self[code]
        return http_status_of(code, self._registry)

    def codes(self) -> list[Code]:
        """All declared codes, ordered by path."""
        return [self._codes[p] for p in sorted(self._codes)]

    def seal(self) -> None:
        """End the registration phase for the taxonomy and its registry."""
        self._sealed = True
        self._registry.seal()
        logger.debug("Taxonomy sealed", codes=len(self._codes))

    def __getitem__(self, path: str) -> Code:
        try:
            return self._codes[path]
        except KeyError:
            raise KeyError(f"Unknown code: {path!r}") from None

    def __contains__(self, path: object) -> bool:
        if isinstance(path, Code):
            path = path.code_str
        return path in self._codes

    def __iter__(self) -> Iterator[Code]:
        return iter(self.codes())

    def __len__(self) -> int:
        return len(self._codes)

    @classmethod
    def from_manifest(
        cls,
        data: dict[str, Any] | TaxonomyManifest,
        registry: MetaData | None = None,
    ) -> Taxonomy:
        """Build a taxonomy from manifest data.

        Parents are declared before their children regardless of the order
        in the manifest.

        Raises:
            TaxonomyError: If the manifest does not validate.
        """
        if isinstance(data, TaxonomyManifest):
            manifest = data
        else:
            try:
                manifest = TaxonomyManifest.model_validate(data)
            except ValidationError as e:
                raise TaxonomyError(f"Invalid taxonomy manifest: {e}") from e

        taxonomy = cls(registry)
        specs = sorted(manifest.codes, key=lambda s: s.code.count(SEPARATOR))
        for spec in specs:
            taxonomy.add(spec.code, http_status=spec.http_status, description=spec.description)
        return taxonomy

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        registry: MetaData | None = None,
    ) -> Taxonomy:
        """Load a taxonomy manifest from a YAML or JSON file.

        Args:
            path: Manifest path (default: the ERRCODE_TAXONOMY environment variable)
            registry: HTTP registry, see :meth:`__init__`

        Raises:
            TaxonomyError: If no path is configured or the file cannot be
                read, validated or applied to the registry.
        """
        raw_path = path or os.getenv(TAXONOMY_ENV)
        if not raw_path:
            raise TaxonomyError(
                f"No taxonomy manifest given and {TAXONOMY_ENV} is not set"
            ).with_hint(f"set {TAXONOMY_ENV} to a YAML or JSON file")

        manifest_path = Path(raw_path)
        try:
            content = manifest_path.read_text(encoding="utf-8")
            data = json.loads(content) if manifest_path.suffix == ".json" else yaml.safe_load(content)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise TaxonomyError(
                f"Failed to read taxonomy manifest: {e}",
                manifest_path=str(manifest_path),
            ) from e

        try:
            taxonomy = cls.from_manifest(data or {}, registry)
        except TaxonomyError as e:
            e.manifest_path = str(manifest_path)
            e.context.details["manifest_path"] = str(manifest_path)
            raise
        except RegistrationError as e:
            raise TaxonomyError(
                f"Invalid taxonomy manifest: {e}",
                manifest_path=str(manifest_path),
            ) from e
        logger.debug("Taxonomy loaded", manifest_path=str(manifest_path), codes=len(taxonomy))
        return taxonomy
