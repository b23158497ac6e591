from __future__ import annotations

import json
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from bitcoin_rpc_client import (
    RPC_IN_WARMUP,
    BitcoinCoreClient,
    DecodeError,
    NetworkError,
    RetryPolicy,
    RpcTimeoutError,
)

from fakes import FakeNode, busy, rpc_err, rpc_ok
from payloads import ADAPTER_CASES


@pytest.mark.parametrize("invoke,method,params,node_result", ADAPTER_CASES)
def test_busy_node_gets_retries_plus_one_final_attempt(sleeps, invoke, method, params, node_result) -> None:
    node = FakeNode(busy())
    client = node.client(retry=RetryPolicy(max_retries=3, interval_s=0.25))

    result = invoke(client)

    assert node.calls == 4
    assert all(p == {"jsonrpc": "1.0", "id": "42", "method": method, "params": params} for p in node.payloads())
    assert not result.ok
    assert result.error.code == RPC_IN_WARMUP
    assert result.error.message == "Loading block index..."
    assert sleeps == [0.25, 0.25, 0.25]


def test_busy_then_ready_returns_value(sleeps) -> None:
    node = FakeNode(busy(), busy(), rpc_ok(120))
    client = node.client(retry=RetryPolicy(max_retries=10, interval_s=0.5))

    result = client.get_block_count()

    assert result.ok
    assert result.value == 120
    assert node.calls == 3
    assert len(sleeps) == 2


def test_final_attempt_result_is_surfaced_even_if_successful(sleeps) -> None:
    node = FakeNode(busy(), busy(), rpc_ok(7))
    client = node.client(retry=RetryPolicy(max_retries=2, interval_s=0.1))

    result = client.get_block_count()

    assert result.value == 7
    assert node.calls == 3


def test_without_retry_policy_exactly_one_call(sleeps) -> None:
    node = FakeNode(busy())
    client = node.client(retry=None)

    result = client.get_best_block_hash()

    assert node.calls == 1
    assert result.error.code == RPC_IN_WARMUP
    assert sleeps == []


def test_zero_retries_means_single_attempt(sleeps) -> None:
    node = FakeNode(busy())
    client = node.client(retry=RetryPolicy(max_retries=0, interval_s=1.0))

    result = client.get_block_count()

    assert node.calls == 1
    assert result.error.code == RPC_IN_WARMUP
    assert sleeps == []


def test_transport_failure_is_not_retried(sleeps) -> None:
    node = FakeNode(httpx.ConnectError)
    client = node.client(retry=RetryPolicy(max_retries=5, interval_s=0.1))

    with pytest.raises(NetworkError):
        client.get_blockchain_info()

    assert node.calls == 1
    assert sleeps == []


def test_timeout_is_not_retried(sleeps) -> None:
    node = FakeNode(httpx.ReadTimeout)
    client = node.client(retry=RetryPolicy(max_retries=5, interval_s=0.1))

    with pytest.raises(RpcTimeoutError):
        client.get_blockchain_info()

    assert node.calls == 1


def test_other_node_errors_are_returned_immediately(sleeps) -> None:
    node = FakeNode(rpc_err(-8, "Block height out of range"))
    client = node.client(retry=RetryPolicy(max_retries=5, interval_s=0.1))

    result = client.get_block_hash(1_000_000)

    assert node.calls == 1
    assert result.error.code == -8
    assert sleeps == []


def test_decode_failure_after_busy_stops_retrying(sleeps) -> None:
    node = FakeNode(busy(), httpx.Response(200, text="<html>proxy</html>"), rpc_ok(1))
    client = node.client(retry=RetryPolicy(max_retries=5, interval_s=0.1))

    with pytest.raises(DecodeError):
        client.get_block_count()

    assert node.calls == 2
    assert sleeps == [0.1]


def test_retry_sleeps_between_attempts() -> None:
    node = FakeNode(busy())
    client = node.client(retry=RetryPolicy(max_retries=3, interval_s=0.05))

    started = time.monotonic()
    result = client.get_block_count()
    elapsed = time.monotonic() - started

    assert result.error.code == RPC_IN_WARMUP
    assert node.calls == 4
    assert elapsed >= 3 * 0.05


def test_retry_is_logged(sleeps, caplog) -> None:
    node = FakeNode(busy(), rpc_ok(1))
    client = node.client(retry=RetryPolicy(max_retries=2, interval_s=0.5))

    with caplog.at_level(logging.INFO, logger="bitcoin_rpc_client"):
        client.get_block_count()

    messages = [r.getMessage() for r in caplog.records]
    assert any("still starting up" in m and "(1/2)" in m for m in messages)


def test_generic_call_shares_the_retry_path(sleeps) -> None:
    node = FakeNode(busy(), rpc_ok({"version": 270000}))
    client = node.client(retry=RetryPolicy(max_retries=1, interval_s=0.1))

    result = client.call("getnetworkinfo")

    assert result.value == {"version": 270000}
    assert [p["method"] for p in node.payloads()] == ["getnetworkinfo", "getnetworkinfo"]


def test_default_retry_policy() -> None:
    client = BitcoinCoreClient.from_credentials("http://127.0.0.1:8332", "u", "p")
    try:
        assert client.retry == RetryPolicy(max_retries=10, interval_s=0.5)
    finally:
        client.close()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_retries": -1},
        {"interval_s": -0.1},
        {"interval_s": float("nan")},
        {"interval_s": float("inf")},
    ],
)
def test_retry_policy_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_shared_client_serves_concurrent_callers(sleeps) -> None:
    lock = threading.Lock()
    seen_heights: set[int] = set()

    def answer(request: httpx.Request) -> httpx.Response:
        # first request per height is busy, so each caller retries on its own
        height = json.loads(request.content)["params"][0]
        with lock:
            first = height not in seen_heights
            seen_heights.add(height)
        if first:
            return busy()
        return rpc_ok(f"{height:064x}")

    node = FakeNode(answer)
    client = node.client(retry=RetryPolicy(max_retries=3, interval_s=0.01))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(client.get_block_hash, range(8)))

    assert [r.value for r in results] == [f"{h:064x}" for h in range(8)]
    assert node.calls == 16
    assert len(sleeps) == 8
