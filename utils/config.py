"""
Deployment Configuration
Reads deployer settings from the environment (and .env via python-dotenv)
"""

import os
import re
from decimal import Decimal, InvalidOperation
from typing import Optional
from loguru import logger
from dotenv import load_dotenv
from eth_keys.constants import SECPK1_N

from .exceptions import ConfigurationError

load_dotenv()

DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_ARTIFACT = "artifacts/contracts/MyToken.sol/MyToken.json"

# secp256k1 group order
SECP256K1_N = SECPK1_N

_HEX_RE = re.compile(r"0[xX][0-9a-fA-F]+")
_DEC_RE = re.compile(r"[0-9]+")

TRUTHY = ('1', 'true', 'yes', 'on')


def parse_private_key(raw: Optional[str]) -> int:
    """
    Parse PRIVATE_KEY as an unsigned integer (hex or decimal)

    Args:
        raw: '0x'-prefixed hex or plain decimal string

    Returns:
        Key as an integer in [1, n-1]

    Raises:
        ConfigurationError: if absent, not numeric, or out of range
    """
    if raw is None or not raw.strip():
        raise ConfigurationError("PRIVATE_KEY must be set")

    value = raw.strip()

    if _HEX_RE.fullmatch(value):
        key = int(value, 16)
    elif _DEC_RE.fullmatch(value):
        key = int(value, 10)
    else:
        # Never echo the value back, it may be a real key with a typo
        raise ConfigurationError(
            "PRIVATE_KEY must be a 0x-prefixed hex or decimal integer"
        )

    if not 0 < key < SECP256K1_N:
        raise ConfigurationError("PRIVATE_KEY is outside the valid secp256k1 range")

    return key


def key_to_bytes(key: int) -> bytes:
    """32-byte big-endian form accepted by eth_account"""
    return key.to_bytes(32, 'big')


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _get_decimal(name: str, default: Optional[str]) -> Optional[Decimal]:
    raw = os.getenv(name, default)
    if raw is None or raw.strip() == '':
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


class DeployConfig:
    """
    Deployment settings

    The private key is read lazily through private_key() so that settings
    can be inspected (and logged) without ever touching the secret.
    """

    def __init__(self):
        """Load settings from environment"""
        self.rpc_url = os.getenv('RPC_URL', DEFAULT_RPC_URL)
        self.artifact_path = os.getenv('CONTRACT_ARTIFACT', DEFAULT_ARTIFACT)
        self.gas_price_gwei = _get_decimal('GAS_PRICE_GWEI', None)
        self.receipt_timeout = _get_int('RECEIPT_TIMEOUT', 300)
        self.update_env_file = os.getenv('UPDATE_ENV_FILE', 'false').strip().lower() in TRUTHY
        self.env_path = os.getenv('ENV_FILE', '.env')
        self.min_balance_eth = _get_decimal('MIN_DEPLOYER_BALANCE_ETH', '0.01')

        logger.debug(
            f"Config loaded - RPC: {self.rpc_url}, artifact: {self.artifact_path}"
        )

    def private_key(self) -> int:
        """Read and validate PRIVATE_KEY"""
        return parse_private_key(os.getenv('PRIVATE_KEY'))

    def token_address(self) -> str:
        """Read TOKEN_CONTRACT_ADDRESS (needed by the verification script)"""
        address = os.getenv('TOKEN_CONTRACT_ADDRESS')
        if not address:
            raise ConfigurationError("TOKEN_CONTRACT_ADDRESS must be set")
        return address.strip()
