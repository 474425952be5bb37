"""Error Hierarchy — status mapping, retryability, and envelope shape."""

from animeproxy.core.errors import (
    ErrorCategory,
    MissingParameterError,
    RouteNotFoundError,
    UpstreamClientError,
    UpstreamInvalidResponseError,
    UpstreamNetworkError,
    UpstreamServerError,
)


def test_missing_parameter_is_400_with_named_title():
    err = MissingParameterError("slug")
    assert err.http_status == 400
    body = err.to_response()
    assert body["error"] == "Missing required parameter: slug"
    assert body["code"] == "VALIDATION_ERROR"
    assert "timestamp" in body
    assert "message" in body


def test_route_not_found_carries_path_and_method():
    body = RouteNotFoundError("GET", "/nope").to_response()
    assert body["error"] == "Endpoint not found"
    assert body["path"] == "/nope"
    assert body["method"] == "GET"


def test_client_error_keeps_upstream_status_and_is_not_retryable():
    err = UpstreamClientError("/anime", 404, {"detail": "missing"})
    assert err.http_status == 404
    assert err.status_code == 404
    assert err.body == {"detail": "missing"}
    assert err.retryable is False
    assert err.message == "API returned status 404"


def test_server_error_is_retryable_and_keeps_status():
    err = UpstreamServerError("/list", 503)
    assert err.retryable is True
    assert err.http_status == 503


def test_network_error_is_retryable_500():
    err = UpstreamNetworkError("/list", "connection reset")
    assert err.retryable is True
    assert err.http_status == 500
    assert err.status_code is None
    assert err.code == "UPSTREAM_UNREACHABLE"


def test_network_timeout_is_categorized():
    err = UpstreamNetworkError("/list", "timeout", timeout=True)
    assert err.code == "UPSTREAM_TIMEOUT"
    assert err.category is ErrorCategory.TIMEOUT


def test_invalid_response_is_502_not_retryable():
    err = UpstreamInvalidResponseError("/list", 200, "Expecting value")
    assert err.http_status == 502
    assert err.retryable is False
