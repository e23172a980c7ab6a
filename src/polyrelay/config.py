from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_DATA_API_URL, DEFAULT_TIMEOUT_MS
from .errors import UnsupportedChainError

__all__ = [
    "POLYGON",
    "AMOY",
    "ContractConfig",
    "CONTRACT_CONFIGS",
    "RELAYER_URLS",
    "RelayerConfig",
    "get_contract_config",
]

POLYGON = 137
AMOY = 80002


@dataclass(frozen=True)
class ContractConfig:
    safe_factory: str
    safe_multisend: str
    ctf: str
    collateral: str


CONTRACT_CONFIGS: Mapping[int, ContractConfig] = MappingProxyType(
    {
        POLYGON: ContractConfig(
            safe_factory="0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b",
            safe_multisend="0xA238CBeb142c10Ef7Ad8442C6D1f9E89e07e7761",
            ctf="0x4D97DCd97eC945f40cF65F87097ACe5EA0476045",
            collateral="0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",  # USDC.e
        ),
        AMOY: ContractConfig(
            safe_factory="0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b",
            safe_multisend="0xA238CBeb142c10Ef7Ad8442C6D1f9E89e07e7761",
            ctf="0x69308FB512518e39F9b16112fA8d994F4e2Bf8bB",
            collateral="0x9c4e1703476e875070ee25b56a58b008cfb8fa78",
        ),
    }
)

RELAYER_URLS: Mapping[int, str] = MappingProxyType(
    {
        POLYGON: "https://relayer-v2.polymarket.com",
        AMOY: "https://relayer-v2-staging.polymarket.dev",
    }
)


def get_contract_config(chain_id: int) -> ContractConfig:
    try:
        return CONTRACT_CONFIGS[chain_id]
    except KeyError:
        raise UnsupportedChainError(chain_id) from None


class RelayerConfig(BaseModel):
    """
    Connection settings for RelayerClient.

    Example:
        ```python
        config = RelayerConfig.for_chain(137, timeout=10000)
        ```
    """

    model_config = ConfigDict(frozen=True)

    relayer_url: str = Field(..., min_length=1, description="Relayer base URL")
    chain_id: int = Field(default=POLYGON, description="Chain id (137 or 80002)")
    data_api_url: str = Field(
        default=DEFAULT_DATA_API_URL,
        description="Data API base URL used for redeemable-position lookups",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        ge=1000,
        description="Request timeout in milliseconds",
    )

    @field_validator("relayer_url", "data_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def for_chain(cls, chain_id: int, relayer_url: Optional[str] = None, **kwargs) -> "RelayerConfig":
        """Build a config using the default relayer URL for ``chain_id``."""
        get_contract_config(chain_id)
        return cls(relayer_url=relayer_url or RELAYER_URLS[chain_id], chain_id=chain_id, **kwargs)
