"""Tests for error response helpers."""

import json

from linesig.common.errors import ErrorCode, error_response


def test_error_envelope():
    """Errors render as {"error": {"code", "message"}}."""
    response = error_response(ErrorCode.UNAUTHORIZED, "no signature", status_code=401)

    assert response.status_code == 401
    assert json.loads(response.body) == {
        "error": {"code": "unauthorized", "message": "no signature"}
    }


def test_error_details_included():
    """Details are attached only when given."""
    response = error_response(
        ErrorCode.INVALID_JSON,
        "Invalid JSON body",
        status_code=400,
        details={"position": 0},
    )

    assert json.loads(response.body)["error"]["details"] == {"position": 0}
