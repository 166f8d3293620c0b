"""
Reads the number of campaigns stored in the ledger contract.
"""
from bittensor.utils.btlogging import logging

from afunding.adapters.ledger_connection import LedgerContract
from afunding.constants import FN_CAMPAIGN_COUNT
from afunding.errors import ParseError


class CountReader:
    """Reads campaignCount() from the bound contract."""

    async def read(self, contract: LedgerContract) -> int:
        """
        Read the current record count.

        Returns:
            Number of campaigns in the contract

        Raises:
            RpcCallError: If the call fails
            TransportError: If the endpoint cannot be reached
            ParseError: If the result is not an unsigned integer
        """
        count = await contract.call(FN_CAMPAIGN_COUNT)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ParseError(f"{FN_CAMPAIGN_COUNT} returned {count!r}, expected an unsigned integer")
        logging.info(f"Campaign count: {count}")
        return count
