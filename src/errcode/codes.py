"""Generic top-level codes.

Applications are encouraged to declare their own codes as children of these
rather than only using the generic roots.
"""

from __future__ import annotations

import httpx

from errcode.code import Code

INTERNAL_CODE = Code.new("internal").set_http(httpx.codes.INTERNAL_SERVER_ERROR)
"""Equivalent to HTTP 500 Internal Server Error."""

INVALID_INPUT_CODE = Code.new("input").set_http(httpx.codes.BAD_REQUEST)
"""Equivalent to HTTP 400 Bad Request."""

NOT_FOUND_CODE = Code.new("missing").set_http(httpx.codes.NOT_FOUND)
"""Equivalent to HTTP 404 Not Found."""

STATE_CODE = Code.new("state").set_http(httpx.codes.BAD_REQUEST)
"""The request is invalid for the current object state. Mapped to HTTP 400."""

ROOT_CODES: tuple[Code, ...] = (INTERNAL_CODE, INVALID_INPUT_CODE, NOT_FOUND_CODE, STATE_CODE)
