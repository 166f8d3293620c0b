"""
Decoding of raw campaigns(uint) responses into Campaign objects.
"""
from typing import Any, Sequence, Union

from eth_utils import to_normalized_address

from afunding.constants import CAMPAIGN_TUPLE_SIZE, UINT64_MASK
from afunding.domain.campaign import Campaign
from afunding.errors import ParseError


def to_canonical_address(value: Union[bytes, str]) -> str:
    """
    Render a ledger address in its fixed textual form.

    Args:
        value: 20 raw bytes or a hex string (with or without 0x, any case)

    Returns:
        Lowercase, 0x-prefixed, 40 hex digit string

    Raises:
        ParseError: If the value is not a 20-byte address
    """
    try:
        return to_normalized_address(value)
    except (ValueError, TypeError) as e:
        raise ParseError(f"Invalid ledger address {value!r}: {e}") from e


def to_float_amount(value: Any) -> float:
    """
    Convert a ledger uint to float.

    The value is truncated to its low 64 bits first. Amounts above 2**53 lose
    precision in the conversion.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"Expected an unsigned integer amount, got {value!r}")
    if value < 0:
        raise ParseError(f"Amount must be unsigned, got {value}")
    return float(value & UINT64_MASK)


def assemble_campaign(index: int, raw: Sequence[Any]) -> Campaign:
    """
    Build a Campaign from a (creator, title, description, goal, raised, completed) tuple.

    Args:
        index: Storage index the tuple was read from, used as the campaign id
        raw: Decoded contract response

    Returns:
        Campaign

    Raises:
        ParseError: If the tuple has the wrong shape or holds malformed values
    """
    if not isinstance(raw, (list, tuple)) or len(raw) != CAMPAIGN_TUPLE_SIZE:
        raise ParseError(f"Expected a {CAMPAIGN_TUPLE_SIZE}-tuple for campaign {index}, got {raw!r}")

    creator, title, description, goal, raised, completed = raw
    return Campaign(
        id=index,
        creator=to_canonical_address(creator),
        title=title,
        description=description,
        goal=to_float_amount(goal),
        funds_raised=to_float_amount(raised),
        completed=completed,
    )
