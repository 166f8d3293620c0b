"""
One-shot block number read for the status display.
"""
from typing import Optional

from bittensor.utils.btlogging import logging

from afunding.adapters.ledger_connection import LedgerConnection
from afunding.cancellation import CancellationToken
from afunding.errors import LedgerError
from afunding.store import ReactiveStore


class BlockNumberReader:
    """Reads the current block number once and publishes it (None on failure)."""

    def __init__(self, connection: LedgerConnection, store: ReactiveStore):
        self.connection = connection
        self.store = store

    async def run(self, token: Optional[CancellationToken] = None) -> Optional[int]:
        try:
            number = await self.connection.block_number()
        except LedgerError as e:
            logging.error(f"Error fetching block number: {e}")
            number = None

        if token is not None and token.cancelled:
            logging.debug("Block number read cancelled, not publishing")
            return number

        self.store.set(number)
        return number
