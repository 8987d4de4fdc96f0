"""Ledger client protocol for record queries."""

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from record_provider.types import Record


@runtime_checkable
class LedgerClient(Protocol):
    """
    Interface for ledger-query services (RPC scanner, local node, test fakes).

    Heights are inclusive. Implementations must never return a record whose
    nonce is in nonces. Failures may be raised; providers turn them into
    returned values.
    """

    async def get_latest_height(self) -> int:
        """Height of the chain tip."""
        ...

    async def find_unspent_records(
        self,
        start_height: int,
        end_height: int,
        private_key: str,
        amounts: Optional[Sequence[int]] = None,
        program: Optional[str] = None,
        nonces: Optional[Sequence[str]] = None,
    ) -> List[Record]:
        """Unspent records visible to private_key, one per amount when amounts is given."""
        ...
