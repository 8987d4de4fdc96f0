"""Tests for records, accounts, error helpers and the check script's helpers."""

import pytest

from main import build_search_parameters
from record_provider import (
    Account, BlockHeightSearch, OpenSearch, Record, RecordNotFoundError,
    UnsupportedOperationError, credits_to_microcredits, is_error, raise_for_result, record_nonces,
)


class TestRecord:
    def test_from_dict_camel_case(self) -> None:
        record = Record.from_dict({
            "nonce": "5field",
            "owner": "aleo1owner",
            "programId": "token.aleo",
            "recordName": "token",
            "microcredits": "42",
            "data": {"amount": "42u64"},
            "blockHeight": 9,
        })
        assert record.program_id == "token.aleo"
        assert record.microcredits == 42
        assert record.block_height == 9
        assert record.data == {"amount": "42u64"}
        assert not record.is_credits

    def test_from_dict_defaults_to_credits(self) -> None:
        record = Record.from_dict({"nonce": "5field", "microcredits": 5000, "block_height": 3})
        assert record.is_credits
        assert record.block_height == 3

    def test_from_dict_requires_nonce(self) -> None:
        with pytest.raises(KeyError):
            Record.from_dict({"microcredits": 1})

    def test_records_are_hashable(self) -> None:
        record = Record(nonce="n1", microcredits=1, data={"x": 1})
        assert record in {record}

    def test_str(self) -> None:
        assert str(Record(nonce="n1", microcredits=5000)) == "5000 microcredits (n1..)"

    def test_record_nonces(self) -> None:
        assert record_nonces([Record(nonce="a"), Record(nonce="b")]) == ["a", "b"]


def test_account_repr_hides_private_key() -> None:
    account = Account(private_key="APrivateKey1zkpSECRET", address="aleo1owner")
    assert "SECRET" not in repr(account)
    assert "aleo1owner" in repr(account)


def test_credits_to_microcredits() -> None:
    assert credits_to_microcredits(0.5) == 500_000
    assert credits_to_microcredits(1) == 1_000_000


class TestErrors:
    def test_not_found_default_message(self) -> None:
        assert str(RecordNotFoundError()) == "Record not found"

    def test_unsupported_is_not_implemented(self) -> None:
        assert isinstance(UnsupportedOperationError("x"), NotImplementedError)

    def test_is_error(self) -> None:
        assert is_error(RecordNotFoundError())
        assert not is_error([Record(nonce="n1")])

    def test_raise_for_result(self) -> None:
        records = [Record(nonce="n1")]
        assert raise_for_result(records) is records
        with pytest.raises(RecordNotFoundError):
            raise_for_result(RecordNotFoundError())


def test_build_search_parameters() -> None:
    assert build_search_parameters(10, 20) == BlockHeightSearch(10, 20)
    assert build_search_parameters(5, None) == OpenSearch({"startHeight": 5})
