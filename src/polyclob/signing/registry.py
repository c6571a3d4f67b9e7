"""
Contract registry — адреса контрактов по chain id

Статическая таблица из двух записей:
- 137   : Polygon mainnet
- иначе : Polygon Amoy (testnet, 80002)
"""

from dataclasses import dataclass
from typing import Final


POLYGON_CHAIN_ID: Final[int] = 137
AMOY_CHAIN_ID: Final[int] = 80002


@dataclass(frozen=True)
class ContractConfig:
    """Адреса контрактов CTF Exchange для одной сети."""

    exchange: str
    neg_risk_exchange: str
    collateral: str
    conditional_tokens: str

    def exchange_for(self, neg_risk: bool) -> str:
        """verifyingContract для EIP-712 домена ордера."""
        return self.neg_risk_exchange if neg_risk else self.exchange


POLYGON_CONTRACTS: Final[ContractConfig] = ContractConfig(
    exchange="0x4bFb41d5B3570DeFd03C39a9A4D8dE6Bd8B8982E",
    neg_risk_exchange="0xC5d563A36AE78145C45a50134d48A1215220f80a",
    collateral="0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174",
    conditional_tokens="0x4D97DCd97eC945f40cF65F87097ACe5EA0476045",
)

POLYGON_AMOY_CONTRACTS: Final[ContractConfig] = ContractConfig(
    exchange="0xdFE02Eb6733538f8Ea35D585af8DE5958AD99E40",
    neg_risk_exchange="0xC5d563A36AE78145C45a50134d48A1215220f80a",
    collateral="0x9c4e1703476e875070ee25b56a58b008cfb8fa78",
    conditional_tokens="0x69308FB512518e39F9b16112fA8d994F4e2Bf8bB",
)


def get_contract_config(chain_id: int) -> ContractConfig:
    """Адреса контрактов для chain id (137 → mainnet, любой другой → Amoy)."""
    return POLYGON_CONTRACTS if chain_id == POLYGON_CHAIN_ID else POLYGON_AMOY_CONTRACTS
