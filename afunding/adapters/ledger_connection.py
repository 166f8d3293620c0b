"""
Connection to the RPC endpoint and bound handle to the campaign contract.

Following Single Responsibility Principle - only responsible for transport and call dispatch.
Blocking web3 calls run in the default executor so the event loop only
suspends at network boundaries.
"""
import asyncio
import json
from typing import Any, Callable, Iterable, List, Optional, TypeVar, Union
from urllib.parse import urlparse

import requests
from bittensor.utils.btlogging import logging
from web3 import Web3
from web3.exceptions import ProviderConnectionError, Web3Exception

from afunding.constants import DEFAULT_ABI_PATH
from afunding.errors import ContractLoadError, RpcCallError, TransportError

T = TypeVar("T")

InterfaceSchema = Union[str, bytes, List[dict]]


def load_contract_abi(path=DEFAULT_ABI_PATH) -> bytes:
    """Read the contract interface schema shipped with the package."""
    with open(path, "rb") as f:
        return f.read()


def parse_interface_schema(interface_schema: InterfaceSchema) -> List[dict]:
    """
    Decode a contract interface schema.

    Args:
        interface_schema: JSON text, JSON bytes, or an already decoded list of ABI entries

    Returns:
        List of ABI entries

    Raises:
        ContractLoadError: If the schema does not parse into a list of entries
    """
    abi = interface_schema
    if isinstance(interface_schema, (str, bytes)):
        try:
            abi = json.loads(interface_schema)
        except ValueError as e:
            raise ContractLoadError(f"Interface schema is not valid JSON: {e}") from e

    if not isinstance(abi, list) or not all(isinstance(entry, dict) for entry in abi):
        raise ContractLoadError("Interface schema must be a list of ABI entries")
    return abi


class LedgerConnection:
    """
    Long-lived handle to the RPC endpoint.

    Built once at startup and shared read-only by every component.
    """

    def __init__(self, w3: Web3, endpoint_url: str):
        self.w3 = w3
        self.endpoint_url = endpoint_url

    @classmethod
    def connect(cls, endpoint_url: str, session: Optional[requests.Session] = None) -> "LedgerConnection":
        """
        Open an HTTP transport to the endpoint.

        Nothing is sent here; an unreachable endpoint is reported on the first call.

        Args:
            endpoint_url: JSON-RPC endpoint (http or https)
            session: Optional requests session to send requests through

        Raises:
            TransportError: If the URL is structurally invalid
        """
        parsed = urlparse(endpoint_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise TransportError(f"Invalid RPC endpoint URL: {endpoint_url!r}")

        provider = Web3.HTTPProvider(
            endpoint_url,
            session=session or requests.Session(),
            exception_retry_configuration=None,
        )
        logging.debug(f"Opened HTTP transport to {endpoint_url}")
        return cls(Web3(provider), endpoint_url)

    def bind_contract(
        self,
        address: str,
        interface_schema: InterfaceSchema,
        required_functions: Iterable[str] = (),
    ) -> "LedgerContract":
        """
        Bind the contract at `address` using its interface schema.

        Args:
            address: Contract address, with or without 0x prefix
            interface_schema: Contract ABI (see parse_interface_schema)
            required_functions: Function names that must be present in the schema

        Returns:
            LedgerContract handle

        Raises:
            ContractLoadError: If the address or schema is malformed, or a required function is missing
        """
        abi = parse_interface_schema(interface_schema)

        # Letter case carries no meaning here; checksums are not enforced
        if not isinstance(address, str) or not Web3.is_address(address.lower()):
            raise ContractLoadError(f"Invalid contract address: {address!r}")
        checksum_address = Web3.to_checksum_address(address)

        function_names = {entry.get("name") for entry in abi if entry.get("type") == "function"}
        missing = [name for name in required_functions if name not in function_names]
        if missing:
            raise ContractLoadError(f"Interface schema is missing functions: {', '.join(missing)}")

        try:
            contract = self.w3.eth.contract(address=checksum_address, abi=abi)
        except (Web3Exception, ValueError, TypeError) as e:
            raise ContractLoadError(f"Failed to load contract at {checksum_address}: {e}") from e

        return LedgerContract(self, checksum_address, abi, contract)

    async def execute(self, operation: str, call: Callable[[], T]) -> T:
        """
        Run a blocking web3 call off the event loop.

        Raises:
            TransportError: If the endpoint cannot be reached
            RpcCallError: If the call or the decoding of its result fails
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, call)
        except (requests.exceptions.RequestException, ProviderConnectionError) as e:
            raise TransportError(f"{operation}: cannot reach {self.endpoint_url}: {e}") from e
        except (Web3Exception, ValueError, TypeError) as e:
            raise RpcCallError(operation, e) from e

    async def block_number(self) -> int:
        """Read the current block number."""
        return await self.execute("eth_blockNumber", lambda: self.w3.eth.block_number)


class LedgerContract:
    """Contract handle bound to an address and a decoded interface schema."""

    def __init__(self, connection: LedgerConnection, address: str, abi: List[dict], contract):
        self.connection = connection
        self.address = address
        self.abi = abi
        self._contract = contract

    async def call(self, function_name: str, *args: Any) -> Any:
        """
        Issue a read-only call and return the decoded result.

        Args:
            function_name: Contract function name
            *args: Function arguments

        Returns:
            Decoded return value (a list for multi-value returns)
        """
        def _call():
            return self._contract.functions[function_name](*args).call()

        return await self.connection.execute(function_name, _call)

    async def transact(self, function_name: str, *args: Any, sender: str) -> str:
        """
        Send a state-changing call as a transaction from `sender`.

        The endpoint is expected to hold the sender account; nothing is signed locally.

        Returns:
            Transaction hash as a 0x-prefixed hex string
        """
        def _transact():
            return self._contract.functions[function_name](*args).transact({"from": sender})

        tx_hash = await self.connection.execute(function_name, _transact)
        return Web3.to_hex(tx_hash)

    def __repr__(self) -> str:
        return f"LedgerContract(address={self.address}, endpoint={self.connection.endpoint_url})"
