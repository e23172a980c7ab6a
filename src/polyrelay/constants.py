"""Constants for the polyrelay SDK.

This module defines the process-wide immutable values used across the SDK:
ABI layout constants, function selectors, EIP-712 type strings, the Safe
factory parameters and relayer defaults.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
ABI_WORD_LENGTH = 32
ABI_WORD_HEX_LENGTH = 64
ADDRESS_LENGTH = 20
MAX_UINT256 = 2**256 - 1

# Ethereum Constants
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_BYTES32 = "0x" + "0" * ABI_WORD_HEX_LENGTH

# Function selectors (first 4 bytes of keccak256 of the signature)
REDEEM_POSITIONS_SELECTOR = "01b7037c"  # redeemPositions(address,bytes32,bytes32,uint256[])
SPLIT_POSITION_SELECTOR = "72ce4275"  # splitPosition(address,bytes32,bytes32,uint256[],uint256)
MERGE_POSITIONS_SELECTOR = "9e7212ad"  # mergePositions(address,bytes32,bytes32,uint256[],uint256)
APPROVE_SELECTOR = "095ea7b3"  # approve(address,uint256)
MULTISEND_SELECTOR = "8d80ff0a"  # multiSend(bytes)

# Binary partition used by split/merge: index set 1 (YES), index set 2 (NO)
BINARY_PARTITION = (1, 2)

# Safe factory / CREATE2 parameters
SAFE_INIT_CODE_HASH = "0x2bce2127ff07fb632d16c8347c4ebf501f4841168bed00d9e6ef715ddb6fcecf"
SAFE_FACTORY_NAME = "Polymarket Contract Proxy Factory"

# EIP-712 type strings
FACTORY_DOMAIN_TYPE = "EIP712Domain(string name,uint256 chainId,address verifyingContract)"
SAFE_DOMAIN_TYPE = "EIP712Domain(uint256 chainId,address verifyingContract)"
CREATE_PROXY_TYPE = "CreateProxy(address paymentToken,uint256 payment,address paymentReceiver)"
SAFE_TX_TYPE = (
    "SafeTx(address to,uint256 value,bytes data,uint8 operation,uint256 safeTxGas,"
    "uint256 baseGas,uint256 gasPrice,address gasToken,address refundReceiver,uint256 nonce)"
)

# Relayer request limits
MAX_METADATA_LENGTH = 500

# Polling defaults for wait_for_transaction
DEFAULT_MAX_POLLS = 30
DEFAULT_POLL_INTERVAL_MS = 2000

# Network defaults
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_DATA_API_URL = "https://data-api.polymarket.com"

# Data API redeemable-position query
REDEEMABLE_SIZE_THRESHOLD = "0.1"
REDEEMABLE_PAGE_LIMIT = 100

# Builder authentication headers
HEADER_API_KEY = "POLY_BUILDER_API_KEY"
HEADER_SIGNATURE = "POLY_BUILDER_SIGNATURE"
HEADER_TIMESTAMP = "POLY_BUILDER_TIMESTAMP"
HEADER_PASSPHRASE = "POLY_BUILDER_PASSPHRASE"

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "ABI_WORD_HEX_LENGTH",
    "ADDRESS_LENGTH",
    "MAX_UINT256",
    "ZERO_ADDRESS",
    "ZERO_BYTES32",
    "REDEEM_POSITIONS_SELECTOR",
    "SPLIT_POSITION_SELECTOR",
    "MERGE_POSITIONS_SELECTOR",
    "APPROVE_SELECTOR",
    "MULTISEND_SELECTOR",
    "BINARY_PARTITION",
    "SAFE_INIT_CODE_HASH",
    "SAFE_FACTORY_NAME",
    "FACTORY_DOMAIN_TYPE",
    "SAFE_DOMAIN_TYPE",
    "CREATE_PROXY_TYPE",
    "SAFE_TX_TYPE",
    "MAX_METADATA_LENGTH",
    "DEFAULT_MAX_POLLS",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_DATA_API_URL",
    "REDEEMABLE_SIZE_THRESHOLD",
    "REDEEMABLE_PAGE_LIMIT",
    "HEADER_API_KEY",
    "HEADER_SIGNATURE",
    "HEADER_TIMESTAMP",
    "HEADER_PASSPHRASE",
]
