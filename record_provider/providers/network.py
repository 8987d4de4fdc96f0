"""Record provider backed by a remote ledger-query service."""

import logging
from typing import Optional, Sequence

from record_provider.ledger.client import LedgerClient
from record_provider.search import SearchParamsLike, resolve_height_window
from record_provider.types import Account
from .base import BaseRecordProvider, RecordsResult

logger = logging.getLogger(__name__)


class NetworkRecordProvider(BaseRecordProvider):
    """
    Finds credits records through a LedgerClient.

    Arbitrary program search is not available from the network service, so
    find_record and find_records always return UnsupportedOperationError.

    Example:
        async with LedgerRpcClient(settings.ledger_url) as rpc:
            provider = NetworkRecordProvider(account, RpcLedgerClient(rpc))
            record = await provider.find_credits_record(5000, True, [])
            # claimed records go in the exclusion list of later searches
            other = await provider.find_credits_record(5000, True, [record.nonce])
    """

    def __init__(self, account: Account, ledger: LedgerClient):
        super().__init__(account)
        self.ledger = ledger

    async def find_credits_records(
        self,
        microcredit_amounts: Sequence[int],
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult:
        """
        Find one credits record per amount with a single ledger query.

        The chain tip is only fetched when no end height is supplied. The
        ledger's result, records or failure, is returned as is. The service
        only reports unspent records, which satisfies either value of unspent.
        """
        window = await resolve_height_window(search_parameters, self.ledger.get_latest_height)
        if isinstance(window, BaseException):
            return window

        try:
            return await self.ledger.find_unspent_records(
                window.start_height,
                window.end_height,
                self.account.private_key,
                list(microcredit_amounts),
                None,
                list(nonces or []),
            )
        except Exception as e:
            logger.error(f"Record search in {window} failed: {e}")
            return e
