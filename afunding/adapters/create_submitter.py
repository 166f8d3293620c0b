"""
Submits new campaigns to the ledger contract.

The write is sent from a fixed sender account taken from configuration. The
endpoint must manage that account; no key is held or used locally.
"""
from typing import Optional

from bittensor.utils.btlogging import logging
from web3 import Web3

from afunding.adapters.ledger_connection import LedgerContract
from afunding.constants import (
    CREATE_ERROR_PREFIX,
    CREATE_SUCCESS_MESSAGE,
    FN_CREATE_CAMPAIGN,
    UINT256_LIMIT,
)
from afunding.errors import LedgerError, ParseError
from afunding.store import ReactiveStore


def parse_goal(goal: str) -> int:
    """
    Parse a user-entered goal as an unsigned decimal ledger integer.

    Only plain ASCII digits are accepted (no sign, whitespace, separators or
    fraction) and the value must fit in 256 bits. Anything else yields 0.
    """
    if isinstance(goal, str) and goal.isascii() and goal.isdigit():
        value = int(goal)
        if value < UINT256_LIMIT:
            return value
    logging.debug(f"Goal {goal!r} is not an unsigned decimal, using 0")
    return 0


class CreateSubmitter:
    """
    Translates a creation form into a createCampaign transaction.

    Keeps the status message of the last submission only.
    """

    def __init__(
        self,
        contract: LedgerContract,
        sender_address: str,
        status_store: Optional[ReactiveStore] = None,
    ):
        """
        Initialize create submitter.

        Args:
            contract: Bound campaign contract
            sender_address: Account the transaction is sent from
            status_store: Store receiving status messages. A new one is created if omitted.

        Raises:
            ParseError: If sender_address is not a valid ledger address
        """
        if not isinstance(sender_address, str) or not Web3.is_address(sender_address.lower()):
            raise ParseError(f"Invalid sender address: {sender_address!r}")
        self.contract = contract
        self.sender_address = Web3.to_checksum_address(sender_address)
        self.status_store = status_store or ReactiveStore(None, name="create status")

    def status(self) -> Optional[str]:
        """Status message of the last submission, None before the first one."""
        return self.status_store.get()

    async def submit(self, title: str, description: str, goal: str) -> str:
        """
        Send createCampaign(title, description, goal) and publish the outcome.

        Args:
            title: Campaign title as entered
            description: Campaign description as entered
            goal: Funding goal as a decimal string; unparseable input becomes 0

        Returns:
            The status message, which also replaces the previous status
        """
        amount = parse_goal(goal)
        logging.info(f"Submitting campaign {title!r} with goal {amount} from {self.sender_address}")

        try:
            tx_hash = await self.contract.transact(
                FN_CREATE_CAMPAIGN,
                title,
                description,
                amount,
                sender=self.sender_address,
            )
        except LedgerError as e:
            logging.error(f"Failed to create campaign {title!r}: {e}")
            message = f"{CREATE_ERROR_PREFIX}{e}"
        else:
            logging.success(f"Created campaign {title!r}, transaction {tx_hash}")
            message = CREATE_SUCCESS_MESSAGE

        self.status_store.set(message)
        return message
