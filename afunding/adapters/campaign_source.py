"""
Interface for fetching campaigns from the ledger contract.

The fetch sequence reads the campaign count, then reads every index in
[0, count), skipping indices whose read fails, and publishes the result to
the store in one replace.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

from bittensor.utils.btlogging import logging

from afunding.adapters.count_reader import CountReader
from afunding.adapters.ledger_connection import LedgerContract
from afunding.cancellation import CancellationToken
from afunding.constants import DEFAULT_FETCH_CONCURRENCY, FN_CAMPAIGNS
from afunding.domain.assembler import assemble_campaign
from afunding.domain.campaign import Campaign
from afunding.errors import LedgerError
from afunding.store import ReactiveStore


def _is_cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled


class ICampaignSource(ABC):
    """Interface for fetching campaigns."""

    @abstractmethod
    async def fetch_campaigns(self, token: Optional[CancellationToken] = None) -> Optional[List[Campaign]]:
        """
        Get the full list of campaigns currently in the ledger.

        Args:
            token: Optional cancellation token

        Returns:
            List of Campaign objects ordered by index, or None if the count
            could not be read or the fetch was cancelled
        """
        pass


class CampaignFetchSequence(ICampaignSource):
    """
    Snapshot fetch of every campaign in the contract.

    Reads are strictly sequential unless a concurrency above 1 is requested,
    in which case reads are tagged with their index and reassembled in order.
    Either way the result is ordered by ascending index with failed indices
    dropped.
    """

    def __init__(
        self,
        contract: LedgerContract,
        store: ReactiveStore,
        count_reader: Optional[CountReader] = None,
        concurrency: int = DEFAULT_FETCH_CONCURRENCY,
    ):
        """
        Initialize fetch sequence.

        Args:
            contract: Bound campaign contract
            store: Store receiving the published snapshot
            count_reader: Reader for campaignCount(). Defaults to CountReader().
            concurrency: Maximum in-flight index reads (1 = sequential)

        Raises:
            ValueError: If concurrency is lower than 1
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.contract = contract
        self.store = store
        self.count_reader = count_reader or CountReader()
        self.concurrency = concurrency

    async def run(self, token: Optional[CancellationToken] = None) -> Optional[List[Campaign]]:
        """
        Fetch all campaigns and publish them to the store.

        A count read failure aborts the sequence and leaves the store untouched.
        A cancelled sequence never publishes.

        Returns:
            The published list, or None if nothing was published
        """
        logging.info("Starting to fetch campaigns...")
        campaigns = await self.fetch_campaigns(token)
        if campaigns is None:
            return None

        if _is_cancelled(token):
            logging.info("Campaign fetch cancelled before publish")
            return None

        self.store.set(campaigns)
        logging.success(f"Published {len(campaigns)} campaigns")
        return campaigns

    async def fetch_campaigns(self, token: Optional[CancellationToken] = None) -> Optional[List[Campaign]]:
        try:
            count = await self.count_reader.read(self.contract)
        except LedgerError as e:
            logging.error(f"Error fetching campaign count: {e}")
            return None

        if self.concurrency == 1:
            campaigns = await self._fetch_sequential(count, token)
        else:
            campaigns = await self._fetch_concurrent(count, token)

        if campaigns is not None:
            skipped = count - len(campaigns)
            if skipped:
                logging.warning(f"Fetched {len(campaigns)} of {count} campaigns, {skipped} skipped")
            else:
                logging.info(f"Fetched {len(campaigns)} campaigns")
        return campaigns

    async def _fetch_sequential(self, count: int, token: Optional[CancellationToken]) -> Optional[List[Campaign]]:
        campaigns = []
        for index in range(count):
            if _is_cancelled(token):
                logging.info(f"Campaign fetch cancelled at index {index}")
                return None
            campaign = await self._fetch_one(index)
            if campaign is not None:
                campaigns.append(campaign)
        return campaigns

    async def _fetch_concurrent(self, count: int, token: Optional[CancellationToken]) -> Optional[List[Campaign]]:
        slots: List[Optional[Campaign]] = [None] * count
        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch_slot(index: int) -> None:
            async with semaphore:
                if _is_cancelled(token):
                    return
                slots[index] = await self._fetch_one(index)

        await asyncio.gather(*(fetch_slot(index) for index in range(count)))

        if _is_cancelled(token):
            logging.info("Campaign fetch cancelled")
            return None
        return [campaign for campaign in slots if campaign is not None]

    async def _fetch_one(self, index: int) -> Optional[Campaign]:
        """Read and decode one index. Failures are logged and yield None."""
        logging.debug(f"Fetching campaign at index: {index}")
        try:
            raw = await self.contract.call(FN_CAMPAIGNS, index)
            campaign = assemble_campaign(index, raw)
        except LedgerError as e:
            logging.warning(f"Error fetching campaign at index {index}: {e}")
            return None
        logging.debug(f"Fetched campaign: {campaign}")
        return campaign
