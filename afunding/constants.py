"""
Constants used throughout the ledger client.

All project constants are centralized here for easy maintenance and configuration.
"""
from pathlib import Path

# Environment variables holding the deployment configuration
ENV_RPC_URL = "APP_RPC_URL"
ENV_CONTRACT_ADDRESS = "APP_CONTRACT_ADDRESS"
ENV_SENDER_ADDRESS = "APP_SENDER_ADDRESS"

# Contract interface schema shipped with the package
DEFAULT_ABI_PATH = Path(__file__).parent / "abis.json"

# Contract functions
FN_CAMPAIGN_COUNT = "campaignCount"
FN_CAMPAIGNS = "campaigns"
FN_CREATE_CAMPAIGN = "createCampaign"
CONTRACT_FUNCTIONS = (FN_CAMPAIGN_COUNT, FN_CAMPAIGNS, FN_CREATE_CAMPAIGN)

# Ledger integer handling
UINT64_MASK = (1 << 64) - 1  # Amounts are truncated to 64 bits before float conversion
UINT256_LIMIT = 1 << 256  # Exclusive upper bound of a ledger uint

# Number of fields in a campaigns(uint) response
CAMPAIGN_TUPLE_SIZE = 6

# Fetch sequence defaults
DEFAULT_FETCH_CONCURRENCY = 1  # 1 means strictly sequential reads

# Submission status messages
CREATE_SUCCESS_MESSAGE = "Campaign created successfully!"
CREATE_ERROR_PREFIX = "Error: "
