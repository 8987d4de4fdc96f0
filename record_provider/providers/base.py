"""Base classes for record providers."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional, Protocol, Sequence, Union, runtime_checkable

from record_provider.errors import RecordNotFoundError, UnsupportedOperationError
from record_provider.search import SearchParamsLike
from record_provider.types import Account, Record

logger = logging.getLogger(__name__)

RecordResult = Union[Record, Exception]
RecordsResult = Union[List[Record], Exception]


@runtime_checkable
class RecordProvider(Protocol):
    """
    Protocol for record sources.

    Every search returns either the records or an error value, never raises.
    nonces lists records already claimed in the current operation; none of
    them may be returned.
    """
    account: Account

    async def find_credits_record(
        self,
        microcredits: int,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordResult: ...

    async def find_credits_records(
        self,
        microcredit_amounts: Sequence[int],
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult: ...

    async def find_record(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordResult: ...

    async def find_records(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult: ...


class BaseRecordProvider(ABC):
    """
    Base class for record providers.

    Subclasses implement the batch credits search. Arbitrary program searches
    report UnsupportedOperationError unless a subclass sets
    SUPPORTS_ARBITRARY_SEARCH and overrides them.
    """
    SUPPORTS_ARBITRARY_SEARCH: ClassVar[bool] = False

    def __init__(self, account: Account):
        self.account = account

    def set_account(self, account: Account):
        """Swap the account used for searches. Not safe during an in-flight search."""
        self.account = account

    @abstractmethod
    async def find_credits_records(
        self,
        microcredit_amounts: Sequence[int],
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult:
        """Find one distinct credits record per amount, in request order."""
        ...

    async def find_credits_record(
        self,
        microcredits: int,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordResult:
        """
        Find a single credits record holding exactly microcredits.

        Any failure of the batch search is reported as RecordNotFoundError,
        with the original failure kept as its cause.
        """
        records = await self.find_credits_records([microcredits], unspent, nonces, search_parameters)
        if not isinstance(records, BaseException) and len(records) > 0:
            return records[0]
        logger.error(f"Record not found with error: {records}")
        return RecordNotFoundError(cause=records if isinstance(records, BaseException) else None)

    async def find_record(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordResult:
        return UnsupportedOperationError(f"{type(self).__name__} does not support arbitrary record search")

    async def find_records(
        self,
        unspent: bool,
        nonces: Optional[Sequence[str]] = None,
        search_parameters: SearchParamsLike = None,
    ) -> RecordsResult:
        return UnsupportedOperationError(f"{type(self).__name__} does not support arbitrary record search")
