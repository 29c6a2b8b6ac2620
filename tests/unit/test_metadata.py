"""Tests for metadata registries and HTTP statuses."""

from __future__ import annotations

import pytest

from errcode import (
    DEFAULT_HTTP_STATUS,
    INTERNAL_CODE,
    INVALID_INPUT_CODE,
    NOT_FOUND_CODE,
    STATE_CODE,
    Code,
    DuplicateMetaDataError,
    InvalidMetaDataError,
    MetaData,
    RegistrySealedError,
    http_status_of,
)
from errcode.http import HTTP_STATUS


class TestMetaData:
    """Tests for MetaData."""

    def test_attach_and_get(self) -> None:
        """Test exact lookup after attaching."""
        registry = MetaData("retry")
        code = Code.new("auth").attach_meta_data(registry, True)
        assert registry.get(code) is True
        assert registry.get("auth") is True
        assert code in registry
        assert "auth" in registry
        assert len(registry) == 1
        assert list(registry) == ["auth"]

    def test_inherits_from_nearest_ancestor(self) -> None:
        """Test a child without a value inherits its parent's."""
        registry = MetaData("retry")
        parent = Code.new("auth")
        child = parent.child("expired")
        grandchild = child.child("refresh")
        parent.attach_meta_data(registry, "parent")
        child.attach_meta_data(registry, "child")

        assert parent.meta_data_from_ancestors(registry) == "parent"
        assert child.meta_data_from_ancestors(registry) == "child"
        assert grandchild.meta_data_from_ancestors(registry) == "child"

    def test_missing_returns_default(self) -> None:
        """Test an unregistered chain yields the default."""
        registry = MetaData("retry")
        code = Code.parse("auth.expired")
        assert code.meta_data_from_ancestors(registry) is None
        assert registry.from_ancestors(code, default=False) is False
        assert registry.get(code, "none") == "none"

    def test_inheritance_uses_paths(self) -> None:
        """Test values attached to one instance apply to equal codes."""
        registry = MetaData("retry")
        Code.new("auth").attach_meta_data(registry, 1)
        assert Code.parse("auth.expired").meta_data_from_ancestors(registry) == 1

    def test_duplicate_registration_fails(self) -> None:
        """Test a second registration fails and keeps the first value."""
        registry = MetaData("http")
        code = Code.new("auth")
        code.attach_meta_data(registry, 401)
        with pytest.raises(DuplicateMetaDataError) as exc_info:
            Code.new("auth").attach_meta_data(registry, 403)
        assert exc_info.value.existing == 401
        assert exc_info.value.registry == "http"
        assert registry.get(code) == 401

    def test_same_path_in_other_registry(self) -> None:
        """Test duplicates are only checked per registry."""
        code = Code.new("auth")
        code.attach_meta_data(MetaData("a"), 1)
        code.attach_meta_data(MetaData("b"), 2)

    def test_sealed_registry_rejects_writes(self) -> None:
        """Test writes after sealing fail while reads still work."""
        registry = MetaData("http")
        code = Code.new("auth").attach_meta_data(registry, 401)
        registry.seal()
        assert registry.sealed
        with pytest.raises(RegistrySealedError):
            code.child("expired").attach_meta_data(registry, 419)
        assert code.child("expired").meta_data_from_ancestors(registry) == 401

    def test_seal_is_idempotent(self) -> None:
        """Test sealing twice is harmless."""
        registry = MetaData("http")
        registry.seal()
        registry.seal()
        assert registry.sealed


class TestHTTPStatus:
    """Tests for HTTP status inheritance."""

    def test_generic_roots(self) -> None:
        """Test the statuses of the generic roots."""
        assert INTERNAL_CODE.http_code() == 500
        assert INVALID_INPUT_CODE.http_code() == 400
        assert NOT_FOUND_CODE.http_code() == 404
        assert STATE_CODE.http_code() == 400

    def test_roots_registered_in_default_registry(self) -> None:
        """Test the generic roots are in the process-wide registry."""
        for path in ("internal", "input", "missing", "state"):
            assert path in HTTP_STATUS

    def test_registry_not_exported(self) -> None:
        """Test the process-wide registry is only reachable from errcode.http."""
        import errcode

        assert "HTTP_STATUS" not in errcode.__all__
        assert not hasattr(errcode, "HTTP_STATUS")

    def test_child_inherits(self) -> None:
        """Test a leaf inherits its root's status."""
        assert NOT_FOUND_CODE.child("missing.user").http_code() == 404
        assert INTERNAL_CODE.child("db").child("timeout").http_code() == 500

    def test_default_is_bad_request(self) -> None:
        """Test codes without any registered ancestor default to 400."""
        assert DEFAULT_HTTP_STATUS == 400
        assert Code.parse("unregistered.leaf").http_code() == 400
        assert http_status_of(Code.new("nowhere")) == 400

    def test_override_in_child(self, http_registry: MetaData) -> None:
        """Test a child status overrides the inherited one."""
        conflict = STATE_CODE.child("state.conflict").set_http(409, http_registry)
        assert conflict.http_code(http_registry) == 409
        assert conflict.child("version").http_code(http_registry) == 409
        assert STATE_CODE.http_code(http_registry) == 400

    def test_duplicate_status_fails(self, http_registry: MetaData) -> None:
        """Test two registrations for the same path fail on the second."""
        code = Code.new("auth").set_http(401, http_registry)
        with pytest.raises(DuplicateMetaDataError):
            Code.new("auth").set_http(403, http_registry)
        assert code.http_code(http_registry) == 401

    @pytest.mark.parametrize("status", [0, 99, 600, True, "404", 404.0])
    def test_invalid_status_fails(self, http_registry: MetaData, status: object) -> None:
        """Test values that are not HTTP statuses are rejected."""
        with pytest.raises(InvalidMetaDataError):
            Code.new("auth").set_http(status, http_registry)  # type: ignore[arg-type]
        assert "auth" not in http_registry
