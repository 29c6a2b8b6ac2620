"""Root pytest fixtures for errcode tests."""

from __future__ import annotations

import pytest

from errcode import INTERNAL_CODE, INVALID_INPUT_CODE, NOT_FOUND_CODE, STATE_CODE, MetaData


@pytest.fixture
def http_registry() -> MetaData:
    """A fresh HTTP registry seeded like the default one.

    Tests register their own statuses here so the process-wide registry
    only holds the generic roots.
    """
    registry = MetaData("http")
    INTERNAL_CODE.set_http(500, registry)
    INVALID_INPUT_CODE.set_http(400, registry)
    NOT_FOUND_CODE.set_http(404, registry)
    STATE_CODE.set_http(400, registry)
    return registry
