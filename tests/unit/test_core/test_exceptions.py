"""Tests for application exceptions."""

from __future__ import annotations

import pytest

from graphql_service.core.exceptions import AppException, RequestParseException


@pytest.mark.unit
def test_app_exception_defaults():
    exc = AppException(status_code=405, detail="nope")

    assert str(exc) == "nope"
    assert exc.title == "Method Not Allowed"
    assert exc.type == "about:blank"
    assert exc.extra == {}


@pytest.mark.unit
def test_request_parse_exception():
    exc = RequestParseException("bad body", type="invalid-body", extra={"size": 3})

    assert isinstance(exc, AppException)
    assert exc.status_code == 400
    assert exc.title == "Bad Request"
    assert exc.extra == {"size": 3}
