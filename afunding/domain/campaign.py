"""
Campaign domain model.

Represents a crowdfunding record as read from the ledger contract.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Campaign:
    """A campaign record as it was stored at a given ledger index."""

    id: int  # Storage index at fetch time, not stable across ledger mutations
    creator: str  # Lowercase 0x-prefixed hex address
    title: str
    description: str
    goal: float
    funds_raised: float
    completed: bool

    def __str__(self) -> str:
        return f"Campaign(id={self.id}, title={self.title!r}, creator={self.creator})"
