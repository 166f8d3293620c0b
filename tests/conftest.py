"""
Pytest configuration for the ledger client tests.

Fetch sequences and submissions log through btlogging; INFO output is shown
so skipped indices and aborted sequences are visible in test runs.
"""
import logging
import sys

# Root handler for libraries logging through the standard module (web3, requests)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)

from bittensor.utils.btlogging import logging as bt_logging

bt_logging.enable_info()
