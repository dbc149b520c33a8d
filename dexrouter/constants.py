"""Protocol constants for the route finder.

Centralizes well-known addresses and tunable defaults.
"""

from dexrouter.models.types import ZERO_ADDRESS, is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a contract address.

    Args:
        name: Name of the contract (for error messages)
        address: The address to validate

    Returns:
        The validated address

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Multicall3 is deployed at the same address on every supported chain
MULTICALL3_ADDRESS = _validate_address("Multicall3", "0xcA11bde05977b3631167028862bE2a173976CA11")

# APIs accept the zero address to mean the chain's native asset
NATIVE_TOKEN_SENTINEL = ZERO_ADDRESS

# Calls packed into one aggregate3 round trip
DEFAULT_BATCH_SIZE = 15

# Route cache lifetime (10 minutes)
DEFAULT_CACHE_TTL_SECONDS = 600

# Per-batch round trip timeout; a timed out batch degrades to failed results
DEFAULT_BATCH_TIMEOUT_SECONDS = 10.0

# Batches in flight at once (1 = strictly sequential)
DEFAULT_MAX_CONCURRENT_BATCHES = 1
