"""
Ledger client configuration.

Following KISS principle - keep configuration simple and centralized.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from afunding.constants import ENV_CONTRACT_ADDRESS, ENV_RPC_URL, ENV_SENDER_ADDRESS


@dataclass(frozen=True)
class LedgerConfig:
    """Immutable configuration needed before the ledger connection is built."""

    rpc_url: str
    contract_address: str
    sender_address: str

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        rpc_url: str = None,
        contract_address: str = None,
        sender_address: str = None,
    ) -> "LedgerConfig":
        """
        Build configuration from explicit values, falling back to environment variables.

        Args:
            environ: Mapping to read variables from. Defaults to os.environ.
            rpc_url: RPC endpoint URL. Falls back to APP_RPC_URL.
            contract_address: Ledger contract address. Falls back to APP_CONTRACT_ADDRESS.
            sender_address: Account used for write calls. Falls back to APP_SENDER_ADDRESS.

        Raises:
            ValueError: If a value is neither passed nor set in the environment.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name, env_name, explicit in (
            ("rpc_url", ENV_RPC_URL, rpc_url),
            ("contract_address", ENV_CONTRACT_ADDRESS, contract_address),
            ("sender_address", ENV_SENDER_ADDRESS, sender_address),
        ):
            value = explicit or environ.get(env_name)
            if not value:
                raise ValueError(f"{env_name} must be set as environment variable or passed as parameter")
            values[field_name] = value
        return cls(**values)
