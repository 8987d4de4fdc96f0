"""
Tests for RpcLedgerClient: wire conversion and contract enforcement.

Uses a FakeRpc returning canned record dicts, no network.
"""

from typing import Any, Dict, List

import pytest

from record_provider import Record
from record_provider.ledger import InsufficientRecordsError, LedgerClient, RpcLedgerClient


class FakeRpc:
    def __init__(self, records: List[Dict[str, Any]], height: int = 100):
        self.records = records
        self.height = height
        self.calls: List[tuple] = []

    async def get_latest_height(self) -> int:
        return self.height

    async def find_unspent_records(self, *args) -> List[Dict[str, Any]]:
        self.calls.append(args)
        return self.records


def wire(nonce: str, microcredits: int, **extra) -> Dict[str, Any]:
    return {"nonce": nonce, "owner": "aleo1owner", "microcredits": microcredits, "blockHeight": 12, **extra}


def test_satisfies_ledger_client_protocol() -> None:
    assert isinstance(RpcLedgerClient(FakeRpc([])), LedgerClient)


@pytest.mark.asyncio
async def test_latest_height_passthrough() -> None:
    assert await RpcLedgerClient(FakeRpc([], height=77)).get_latest_height() == 77


@pytest.mark.asyncio
async def test_forwards_query_arguments() -> None:
    rpc = FakeRpc([wire("n1", 5)])
    await RpcLedgerClient(rpc).find_unspent_records(1, 9, "key", [5], None, ["x"])
    assert rpc.calls == [(1, 9, "key", [5], None, ["x"])]


@pytest.mark.asyncio
async def test_converts_and_orders_by_amount() -> None:
    rpc = FakeRpc([wire("n1", 100), wire("n2", 200)])
    records = await RpcLedgerClient(rpc).find_unspent_records(0, 100, "key", [200, 100], None, [])
    assert [r.nonce for r in records] == ["n2", "n1"]
    assert records[0] == Record(nonce="n2", owner="aleo1owner", microcredits=200, block_height=12)


@pytest.mark.asyncio
async def test_drops_excluded_nonces() -> None:
    rpc = FakeRpc([wire("n1", 100), wire("n2", 100)])
    records = await RpcLedgerClient(rpc).find_unspent_records(0, 100, "key", [100], None, ["n1"])
    assert [r.nonce for r in records] == ["n2"]


@pytest.mark.asyncio
async def test_duplicate_nonce_cannot_fill_two_amounts() -> None:
    rpc = FakeRpc([wire("n1", 100), wire("n1", 100)])
    with pytest.raises(InsufficientRecordsError) as exc:
        await RpcLedgerClient(rpc).find_unspent_records(0, 100, "key", [100, 100], None, [])
    assert exc.value.missing == [100]


@pytest.mark.asyncio
async def test_skips_malformed_entries() -> None:
    rpc = FakeRpc([{"owner": "no nonce"}, wire("n1", "not a number"), wire("n2", 100)])
    records = await RpcLedgerClient(rpc).find_unspent_records(0, 100, "key", None, None, None)
    assert [r.nonce for r in records] == ["n2"]


@pytest.mark.asyncio
async def test_program_filter() -> None:
    rpc = FakeRpc([wire("n1", 1), wire("n2", 1, programId="token.aleo", recordName="token")])
    records = await RpcLedgerClient(rpc).find_unspent_records(0, 100, "key", None, "token.aleo", None)
    assert [r.nonce for r in records] == ["n2"]
    assert not records[0].is_credits
