"""
Error taxonomy for the ledger client.

Adapters translate library exceptions into these types at the boundary.
Callers decide the policy (skip, abort, or report as a status message).
"""


class LedgerError(Exception):
    """Base class for all ledger client errors."""


class TransportError(LedgerError):
    """The RPC endpoint URL is malformed or the endpoint cannot be reached."""


class ContractLoadError(LedgerError):
    """The contract address or interface schema is malformed."""


class ParseError(LedgerError):
    """Malformed numeric or address input, from the user or from a ledger response."""


class RpcCallError(LedgerError):
    """A single contract call failed."""

    def __init__(self, function_name: str, cause: Exception):
        self.function_name = function_name
        self.cause = cause
        super().__init__(f"{function_name} call failed: {cause!r}")
