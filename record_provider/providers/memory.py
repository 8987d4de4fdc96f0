"""Record provider over a locally synced set of records."""

import logging
from typing import Iterable, List, Optional, Sequence

from record_provider.errors import RecordNotFoundError
from record_provider.search import (
    HeightWindow, OpenSearch, ProgramRecordSearch, SearchParamsLike,
    as_count, as_int, as_search_params, resolve_height_window,
)
from record_provider.types import Account, Record
from .base import BaseRecordProvider, RecordResult, RecordsResult

logger = logging.getLogger(__name__)


class InMemoryRecordProvider(BaseRecordProvider):
    """
    Searches records already synced to the local process.

    Supports arbitrary program search. latest_height is the height the local
    copy is synced to; it defaults to the highest stored block height.
    """
    SUPPORTS_ARBITRARY_SEARCH = True

    def __init__(self, account: Account, records: Iterable[Record] = (), latest_height: Optional[int] = None):
        super().__init__(account)
        self._records: List[Record] = []
        self._spent: set = set()
        self._latest_height = latest_height
        self.add_records(records)

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    def add_records(self, records: Iterable[Record]):
        """Add records, ignoring nonces already stored."""
        known = {r.nonce for r in self._records}
        for record in records:
            if record.nonce not in known:
                known.add(record.nonce)
                self._records.append(record)

    def mark_spent(self, nonce: str):
        self._spent.add(nonce)

    def is_spent(self, nonce: str) -> bool:
        return nonce in self._spent

    @property
    def latest_height(self) -> int:
        if self._latest_height is not None:
            return self._latest_height
        heights = [r.block_height for r in self._records if r.block_height is not None]
        return max(heights, default=0)

    @latest_height.setter
    def latest_height(self, height: int):
        self._latest_height = height

    async def _get_latest_height(self) -> int:
        return self.latest_height

    def _candidates(self, window: HeightWindow, unspent: bool, nonces: Optional[Sequence[str]]) -> List[Record]:
        excluded = set(nonces or [])
        return [
            r for r in self._records
            if r.nonce not in excluded
            and not (unspent and r.nonce in self._spent)
            and (r.block_height is None or r.block_height in window)
        ]

    async def find_credits_records(
        self,
        microcredit_amounts: Sequence[int],
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult:
        window = await resolve_height_window(search_parameters, self._get_latest_height)
        if isinstance(window, BaseException):
            return window

        available = [r for r in self._candidates(window, unspent, nonces) if r.is_credits]
        matched = []
        for amount in microcredit_amounts:
            match = next((r for r in available if r.microcredits == amount), None)
            if match is None:
                return RecordNotFoundError(f"No credits record of {amount} microcredits in {window}")
            available.remove(match)
            matched.append(match)
        return matched

    async def find_record(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordResult:
        records = await self.find_records(unspent, nonces, search_parameters)
        if isinstance(records, BaseException):
            return records
        return records[0]

    async def find_records(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult:
        """
        Find records of any program.

        Honours ProgramRecordSearch, or the programId, recordName, amount and
        maxRecords keys of free-form parameters. Non-integer amounts and
        limits, and negative limits, are ignored.
        """
        params = as_search_params(search_parameters)
        window = await resolve_height_window(params, self._get_latest_height)
        if isinstance(window, BaseException):
            return window

        program_id = record_name = amount = max_records = None
        if isinstance(params, ProgramRecordSearch):
            program_id, record_name = params.program_id, params.record_name
            amount, max_records = as_int(params.amount), as_count(params.max_records)
        elif isinstance(params, OpenSearch):
            program_id = params.get("programId", "program_id")
            record_name = params.get("recordName", "record_name")
            amount = as_int(params.get("amount"))
            max_records = as_count(params.get("maxRecords", "max_records"))

        found = [
            r for r in self._candidates(window, unspent, nonces)
            if (program_id is None or r.program_id == program_id)
            and (record_name is None or r.record_name == record_name)
            and (amount is None or r.microcredits == amount)
        ]
        if max_records is not None:
            found = found[:max_records]
        if not found:
            return RecordNotFoundError(f"No records matching {params} in {window}")
        return found
