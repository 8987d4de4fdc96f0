"""
Core types for record discovery.

Records arrive already decrypted from the ledger-query service. They are
treated as read-only values: providers filter and return them, never mutate.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

CREDITS_PROGRAM = "credits.aleo"
CREDITS_RECORD = "credits"
MICROCREDITS_PER_CREDIT = 1_000_000


@dataclass(frozen=True)
class Record:
    """
    A decrypted record owned by the searching account.

    The nonce is unique per record and is what callers collect to exclude
    records they have already claimed.
    """
    nonce: str
    owner: str = ""
    program_id: str = CREDITS_PROGRAM
    record_name: str = CREDITS_RECORD
    microcredits: Optional[int] = None
    data: Mapping[str, Any] = field(default_factory=dict, compare=False)
    plaintext: Optional[str] = field(default=None, compare=False)
    block_height: Optional[int] = None

    @property
    def is_credits(self) -> bool:
        return self.program_id == CREDITS_PROGRAM and self.record_name == CREDITS_RECORD

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Record":
        """
        Build from the ledger service wire format.

        Accepts camelCase or snake_case keys. Raises KeyError without a nonce
        and ValueError for a non-integer amount.
        """
        nonce = raw.get("nonce")
        if not nonce:
            raise KeyError("nonce")
        amount = raw.get("microcredits")
        height = raw.get("blockHeight", raw.get("block_height"))
        return cls(
            nonce=str(nonce),
            owner=raw.get("owner", ""),
            program_id=raw.get("programId", raw.get("program_id", CREDITS_PROGRAM)),
            record_name=raw.get("recordName", raw.get("record_name", CREDITS_RECORD)),
            microcredits=int(amount) if amount is not None else None,
            data=dict(raw.get("data") or {}),
            plaintext=raw.get("plaintext"),
            block_height=int(height) if height is not None else None,
        )

    def __str__(self) -> str:
        if self.is_credits:
            return f"{self.microcredits} microcredits ({self.nonce[:12]}..)"
        return f"{self.program_id}/{self.record_name} ({self.nonce[:12]}..)"


@dataclass(frozen=True)
class Account:
    """Credentials used to authorize record queries. The private key never appears in repr."""
    private_key: str
    address: str = ""

    def __repr__(self) -> str:
        return f"Account(address={self.address!r})"


def credits_to_microcredits(credits: float) -> int:
    return int(round(credits * MICROCREDITS_PER_CREDIT))


def record_nonces(records) -> list:
    """Nonces of the given records, in order. Handy for building exclusion lists."""
    return [r.nonce for r in records]
