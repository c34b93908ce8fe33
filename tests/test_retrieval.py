"""Tests for batched retrieval and partial failure tolerance."""

import asyncio

import pytest

from conftest import FakeLister, make_object
from kube_search_mcp.config import SearchSettings
from kube_search_mcp.search.models import ListRequest
from kube_search_mcp.search.retrieval import BatchRetriever, batched


def test_batched_splits_in_order():
    assert list(batched(["a", "b", "c", "d", "e"], 2)) == [["a", "b"], ["c", "d"], ["e"]]
    assert list(batched([], 3)) == []


@pytest.mark.asyncio
async def test_failed_unit_yields_empty_list(failing_unit):
    lister = FakeLister(objects={("jobs", "ns1"): failing_unit, ("jobs", "ns2"): [make_object("job-a")]})
    retriever = BatchRetriever(lister, SearchSettings())

    outcomes = await retriever.fetch_batch("jobs", ["ns1", "ns2"])

    assert outcomes[0].candidates() == []
    assert not outcomes[0].ok
    assert [c.name for c in outcomes[1].candidates()] == ["job-a"]


@pytest.mark.asyncio
async def test_unexpected_exception_is_wrapped():
    lister = FakeLister(objects={("pods", "ns1"): ValueError("boom")})
    outcome = await BatchRetriever(lister, SearchSettings()).fetch_unit(ListRequest(kind="pods", namespace="ns1"))

    assert outcome.error is not None
    assert outcome.error.namespace == "ns1"
    assert outcome.candidates() == []


class SlowFirstLister(FakeLister):
    async def list(self, request):
        if request.namespace == "slow":
            await asyncio.sleep(0.05)
        return await super().list(request)


@pytest.mark.asyncio
async def test_outcomes_follow_namespace_order_not_completion_order():
    lister = SlowFirstLister(
        objects={("pods", "slow"): [make_object("a")], ("pods", "fast"): [make_object("b")]}
    )
    outcomes = await BatchRetriever(lister, SearchSettings()).fetch_batch("pods", ["slow", "fast"])
    assert [o.request.namespace for o in outcomes] == ["slow", "fast"]


def test_requests_carry_settings_bounds():
    settings = SearchSettings(request_timeout_s=7.0, max_response_bytes=2048)
    request = BatchRetriever(FakeLister(), settings).build_request("pods", "ns1")
    assert request.timeout_s == 7.0
    assert request.max_bytes == 2048
