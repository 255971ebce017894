import os
from web3 import Web3
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from clients.starklens import DEFAULT_STARKLENS_API_URL
from clients.voyager import DEFAULT_VOYAGER_API_URL

# Starknet contract addresses are field elements below 2**251
STARKNET_ADDRESS_BOUND = 2**251


class Settings:
    """Application settings loaded from environment variables"""

    def __init__(self):
        # Load environment variables from .env file
        load_dotenv()
        # Tracked contract and Voyager credentials
        contract_address = self._get_env('STARKLENS_SWAPERC20_CONTRACT')
        self.contract_address = self._validate_contract_address(contract_address)
        self.voyager_api_key = self._get_env('VOYAGER_SECRET')
        # Endpoints
        self.voyager_api_url = self._get_env('VOYAGER_API_URL', DEFAULT_VOYAGER_API_URL)
        self.starklens_api_url = self._get_env('STARKLENS_API_URL', DEFAULT_STARKLENS_API_URL)
        # Local event record
        self.db_path = self._get_env('DB_PATH', 'starkcron_voyager.db')
        # Service settings
        self.poll_interval = self._get_int_env('POLL_INTERVAL', '20')
        self.request_timeout = self._get_int_env('REQUEST_TIMEOUT', '30')

    def _get_env(self, key: str, default: Optional[str] = None) -> str:
        """Get environment variable with optional default"""
        value = os.getenv(key)
        if value is not None:
            return value

        if default is not None:
            return default

        # Raise an exception if neither value nor default is provided
        raise ValueError(f"Environment variable '{key}' not set and no default value provided.")

    def _get_int_env(self, key: str, default: str) -> int:
        raw = self._get_env(key, default)
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' must be an integer, got {raw!r}")
        if value <= 0:
            raise ValueError(f"Environment variable '{key}' must be positive, got {value}")
        return value

    @staticmethod
    def _validate_contract_address(address: str) -> str:
        """Check that the address is a 0x-prefixed Starknet felt and normalize its case"""
        address = address.strip()
        if not address.lower().startswith('0x'):
            raise ValueError(f"Invalid Starknet address: {address}")
        try:
            value = Web3.to_int(hexstr=address)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid Starknet address: {address}")
        if value >= STARKNET_ADDRESS_BOUND:
            raise ValueError(f"Invalid Starknet address: {address}")

        return address.lower()

    def as_dict(self) -> Dict[str, Any]:
        """Return settings as a dictionary, with the API key masked"""
        return {
            'contract_address': self.contract_address,
            'voyager_api_key': '***',
            'voyager_api_url': self.voyager_api_url,
            'starklens_api_url': self.starklens_api_url,
            'db_path': self.db_path,
            'poll_interval': self.poll_interval,
            'request_timeout': self.request_timeout,
        }
