import argparse
import asyncio
from typing import Optional

import requests
from bittensor.core.config import Config
from bittensor.utils.btlogging import logging

from afunding.adapters.block_number_source import BlockNumberReader
from afunding.adapters.campaign_source import CampaignFetchSequence
from afunding.adapters.create_submitter import CreateSubmitter
from afunding.adapters.ledger_connection import (
    InterfaceSchema,
    LedgerConnection,
    load_contract_abi,
)
from afunding.cancellation import CancellationToken
from afunding.constants import CONTRACT_FUNCTIONS, DEFAULT_FETCH_CONCURRENCY
from afunding.ledger_config import LedgerConfig
from afunding.store import ReactiveStore


class MountHandle:
    """Work started by a view mount. Unmounting cancels it cooperatively."""

    def __init__(self, token: CancellationToken, task: asyncio.Task):
        self.token = token
        self.task = task

    def unmount(self) -> None:
        self.token.cancel()

    def __await__(self):
        return self.task.__await__()


class AfundingApp:
    """
    Application wiring.

    Following Dependency Inversion Principle - every component receives the
    shared connection and contract at construction.
    """

    def __init__(
        self,
        config: LedgerConfig,
        interface_schema: Optional[InterfaceSchema] = None,
        concurrency: int = DEFAULT_FETCH_CONCURRENCY,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the application.

        Args:
            config: Endpoint, contract and sender configuration
            interface_schema: Contract ABI. Defaults to the packaged abis.json.
            concurrency: Maximum in-flight index reads per fetch sequence
            session: Optional requests session for the HTTP transport

        Raises:
            TransportError: If the RPC URL is malformed
            ContractLoadError: If the contract address or schema is malformed
            ParseError: If the sender address is malformed
        """
        self.config = config
        self.connection = LedgerConnection.connect(config.rpc_url, session=session)
        self.contract = self.connection.bind_contract(
            config.contract_address,
            interface_schema if interface_schema is not None else load_contract_abi(),
            required_functions=CONTRACT_FUNCTIONS,
        )
        logging.info(f"Bound campaign contract {self.contract.address} on {config.rpc_url}")

        self._initialize_core_components(concurrency)

    def _initialize_core_components(self, concurrency: int):
        """Initialize stores and components following dependency injection."""
        self.campaigns: ReactiveStore = ReactiveStore([], name="campaigns")
        self.block_number: ReactiveStore = ReactiveStore(None, name="block number")

        self.fetch_sequence = CampaignFetchSequence(
            contract=self.contract,
            store=self.campaigns,
            concurrency=concurrency,
        )
        self.block_number_reader = BlockNumberReader(self.connection, self.block_number)
        self.submitter = CreateSubmitter(self.contract, self.config.sender_address)

    def mount_campaign_list(self) -> MountHandle:
        """
        Start a full campaign fetch for a newly mounted list view.

        Every mount starts an independent sequence; nothing is cached between mounts.
        Must be called from a running event loop.
        """
        token = CancellationToken()
        task = asyncio.get_running_loop().create_task(self.fetch_sequence.run(token))
        return MountHandle(token, task)

    def mount_home(self) -> MountHandle:
        """Start the one-shot block number read for the home view."""
        token = CancellationToken()
        task = asyncio.get_running_loop().create_task(self.block_number_reader.run(token))
        return MountHandle(token, task)

    async def submit(self, title: str, description: str, goal: str) -> str:
        """Submit a creation form. The campaign list is not refreshed."""
        return await self.submitter.submit(title, description, goal)

    def status(self) -> Optional[str]:
        return self.submitter.status()


def get_config(parser: Optional[argparse.ArgumentParser] = None) -> Config:
    """Get script configuration, with ledger overrides and logging arguments."""
    parser = parser or argparse.ArgumentParser()
    parser.add_argument("--rpc-url", type=str, default=None, help="JSON-RPC endpoint. Defaults to APP_RPC_URL.")
    parser.add_argument(
        "--contract-address", type=str, default=None, help="Campaign contract address. Defaults to APP_CONTRACT_ADDRESS."
    )
    parser.add_argument(
        "--sender-address", type=str, default=None, help="Account for write calls. Defaults to APP_SENDER_ADDRESS."
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_FETCH_CONCURRENCY,
        help="Maximum in-flight campaign reads. 1 reads strictly in order.",
    )
    logging.add_args(parser)
    return Config(parser)


def create_app(config: Config) -> AfundingApp:
    """Set up logging and build the application from script configuration."""
    logging(config=config)
    ledger_config = LedgerConfig.from_env(
        rpc_url=config.rpc_url,
        contract_address=config.contract_address,
        sender_address=config.sender_address,
    )
    return AfundingApp(ledger_config, concurrency=config.concurrency)
