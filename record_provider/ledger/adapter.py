"""Adapter implementing the LedgerClient protocol over LedgerRpcClient."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from record_provider.types import Record
from .rpc_client import LedgerQueryError, LedgerRpcClient

logger = logging.getLogger(__name__)


class InsufficientRecordsError(LedgerQueryError):
    """The service could not supply one distinct record per requested amount."""

    def __init__(self, missing: Sequence[int]):
        super().__init__(f"Insufficient records: no match for amounts {list(missing)}")
        self.missing = list(missing)


class RpcLedgerClient:
    """
    Wraps LedgerRpcClient to provide the LedgerClient interface.

    The service is trusted to scan, but its replies are checked here: excluded
    and duplicate nonces are dropped and a batch is either fully matched, in
    request order, or rejected.
    """

    def __init__(self, rpc: LedgerRpcClient):
        self.rpc = rpc

    async def get_latest_height(self) -> int:
        return await self.rpc.get_latest_height()

    async def find_unspent_records(
        self,
        start_height: int,
        end_height: int,
        private_key: str,
        amounts: Optional[Sequence[int]] = None,
        program: Optional[str] = None,
        nonces: Optional[Sequence[str]] = None,
    ) -> List[Record]:
        raw = await self.rpc.find_unspent_records(
            start_height, end_height, private_key, amounts, program, nonces,
        )
        records = self._convert(raw, set(nonces or []))
        if program:
            records = [r for r in records if r.program_id == program]
        if amounts is None:
            return records
        return self._match_amounts(records, amounts)

    def _convert(self, raw: List[Dict[str, Any]], excluded: set) -> List[Record]:
        """Convert wire dicts to records, dropping excluded, duplicate and malformed entries."""
        records = []
        seen = set()
        for entry in raw:
            try:
                record = Record.from_dict(entry)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.debug(f"Skipping malformed record: {e}")
                continue
            if record.nonce in excluded:
                logger.warning(f"Ledger service returned excluded record {record.nonce[:16]}...")
                continue
            if record.nonce in seen:
                continue
            seen.add(record.nonce)
            records.append(record)
        return records

    def _match_amounts(self, records: List[Record], amounts: Sequence[int]) -> List[Record]:
        """Pick one distinct record per amount, in request order."""
        available = list(records)
        matched, missing = [], []
        for amount in amounts:
            match = next((r for r in available if r.microcredits == amount), None)
            if match is None:
                missing.append(amount)
                continue
            available.remove(match)
            matched.append(match)
        if missing:
            raise InsufficientRecordsError(missing)
        return matched
