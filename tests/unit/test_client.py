"""Tests for HTTP responses and remote error decoding."""

from __future__ import annotations

from subprocess import CalledProcessError

import httpx
import pytest

from errcode import (
    INTERNAL_CODE,
    INVALID_INPUT_CODE,
    NOT_FOUND_CODE,
    STATE_CODE,
    CodedError,
    InternalError,
    MetaData,
    NotFoundError,
    RemoteErrorCode,
    code_for_status,
    code_of,
    op,
    operation_of,
    to_response,
)
from errcode.json_format import JSONFormat


class TestToResponse:
    """Tests for to_response."""

    def test_status_and_body(self) -> None:
        """Test the response uses the inherited status and the envelope."""
        err = op("user.get").add_to(NotFoundError(ValueError("no user")))
        response = to_response(err)
        assert response.status_code == 404
        assert response.json() == {
            "data": "no user",
            "msg": "user.get: no user",
            "code": "missing",
            "operation": "user.get",
        }

    def test_custom_registry(self, http_registry: MetaData) -> None:
        """Test the status is read from the given registry."""
        conflict = STATE_CODE.child("conflict").set_http(409, http_registry)
        err = CodedError(ValueError("x"), conflict)
        assert to_response(err, http_registry).status_code == 409
        assert to_response(err).status_code == 400
        assert to_response(InternalError(ValueError("x")), http_registry).status_code == 500

    def test_binary_client_data(self) -> None:
        """Test errors with binary attributes still produce a response."""
        cause = CalledProcessError(2, ["convert"], output=b"\xff\xfe")
        response = to_response(InternalError(cause))
        assert response.status_code == 500
        assert response.json()["data"]["returncode"] == 2

    def test_mock_transport(self) -> None:
        """Test to_response works as a MockTransport handler."""

        def handler(request: httpx.Request) -> httpx.Response:
            return to_response(NotFoundError(LookupError(request.url.path)))

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            response = client.get("https://api.example.com/users/7")

        remote = RemoteErrorCode.from_response(response)
        assert remote.code() == NOT_FOUND_CODE
        assert str(remote) == "/users/7"


class TestRemoteErrorCode:
    """Tests for RemoteErrorCode."""

    def test_decode_envelope(self) -> None:
        """Test an envelope decodes into an ErrorCode."""
        response = httpx.Response(
            409,
            json={
                "data": {"obstacle": 3},
                "msg": "path.move: blocked",
                "code": "state.blocked",
                "operation": "path.move",
            },
            headers={"x-request-id": "req-1"},
        )
        remote = RemoteErrorCode.from_response(response)
        assert code_of(remote) == STATE_CODE.child("blocked")
        assert remote.code().is_descendant_of(STATE_CODE)
        assert str(remote) == "path.move: blocked"
        assert operation_of(remote) == "path.move"
        assert remote.get_client_data() == {"obstacle": 3}
        assert remote.status_code == 409
        assert remote.request_id == "req-1"

    def test_reencode(self) -> None:
        """Test a decoded error reports the same envelope."""
        payload = {"data": [1, 2], "msg": "m", "code": "input.quota"}
        remote = RemoteErrorCode.from_response(httpx.Response(400, json=payload))
        assert JSONFormat.from_error_code(remote).to_dict() == payload

    @pytest.mark.parametrize(
        ("status", "expected"),
        [(404, NOT_FOUND_CODE), (500, INTERNAL_CODE), (503, INTERNAL_CODE), (422, INVALID_INPUT_CODE)],
    )
    def test_non_envelope_body(self, status: int, expected: object) -> None:
        """Test a body that is not an envelope gets a code from the status."""
        response = httpx.Response(status, text="upstream exploded")
        remote = RemoteErrorCode.from_response(response)
        assert remote.code() == expected
        assert remote.get_client_data() == "upstream exploded"
        assert str(remote) == response.reason_phrase

    def test_json_body_without_envelope(self) -> None:
        """Test a JSON body missing envelope fields is kept as data."""
        response = httpx.Response(500, json={"error": "boom"})
        remote = RemoteErrorCode.from_response(response)
        assert remote.code() == INTERNAL_CODE
        assert remote.get_client_data() == {"error": "boom"}

    def test_malformed_code(self) -> None:
        """Test an envelope with an invalid code path falls back to the status."""
        response = httpx.Response(404, json={"data": None, "msg": "m", "code": "a..b"})
        assert RemoteErrorCode.from_response(response).code() == NOT_FOUND_CODE

    def test_code_for_status(self) -> None:
        """Test generic codes for statuses."""
        assert code_for_status(404) == NOT_FOUND_CODE
        assert code_for_status(502) == INTERNAL_CODE
        assert code_for_status(400) == INVALID_INPUT_CODE
