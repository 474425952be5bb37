"""Domain Types — ProxyRequest immutability and query item ordering."""

import dataclasses

import pytest

from animeproxy.core.domain_types import Endpoint, ProxyRequest


def test_endpoint_values_are_paths():
    assert [e.value for e in Endpoint] == [
        "/list", "/anime", "/episode", "/movie", "/pack",
    ]


def test_query_items_keep_insertion_order_and_stringify():
    req = ProxyRequest(Endpoint.EPISODE, {"slug": "bleach", "season": 2, "episode": 7})
    assert req.query_items() == [("slug", "bleach"), ("season", "2"), ("episode", "7")]


def test_query_items_skip_empty_values():
    req = ProxyRequest(Endpoint.LIST, {"search": "", "page": 1, "slug": None})
    assert req.query_items() == [("page", "1")]


def test_proxy_request_is_frozen():
    req = ProxyRequest(Endpoint.LIST, {"page": 1})
    with pytest.raises(dataclasses.FrozenInstanceError):
        req.endpoint = Endpoint.PACK  # type: ignore[misc]
    with pytest.raises(TypeError):
        req.params["page"] = 2  # type: ignore[index]


def test_proxy_request_copies_params():
    params = {"page": 1}
    req = ProxyRequest(Endpoint.LIST, params)
    params["page"] = 5
    assert req.params["page"] == 1
