"""Configuration — параметры клиента и загрузка из окружения.

Переменные окружения:
- POLYCLOB_HOST                : базовый URL API
- POLYCLOB_CHAIN_ID            : chain id (137 mainnet, 80002 Amoy)
- POLYCLOB_REQUEST_TIMEOUT_SEC : таймаут HTTP запроса
- POLYCLOB_REQUIRE_NONCE       : запретить nonce = 0 без источника nonce
- POLYCLOB_SIGNATURE_TYPE      : eoa | poly-proxy | poly-gnosis-safe
- POLYCLOB_API_KEY / POLYCLOB_API_SECRET / POLYCLOB_API_PASSPHRASE : L2 credentials
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from polyclob.core.domain.credentials import ApiCredentials
from polyclob.core.domain.order import SignatureType
from polyclob.signing.registry import POLYGON_CHAIN_ID
from polyclob.transport.http import DEFAULT_HOST, DEFAULT_TIMEOUT_SEC


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class ClientConfig:
    """Конфигурация клиента CLOB."""
    host: str = DEFAULT_HOST
    chain_id: int = POLYGON_CHAIN_ID
    request_timeout_sec: float = DEFAULT_TIMEOUT_SEC
    require_nonce: bool = False
    signature_type: SignatureType = SignatureType.EOA

    def __post_init__(self):
        if not self.host:
            raise ValueError("host cannot be empty")
        if self.chain_id <= 0:
            raise ValueError(f"chain_id must be positive: {self.chain_id}")
        if self.request_timeout_sec <= 0:
            raise ValueError(f"request_timeout_sec must be positive: {self.request_timeout_sec}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Конфигурация из переменных окружения (отсутствующие → defaults).

        Raises:
            ValueError: Если значение переменной некорректно
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            host=env.get("POLYCLOB_HOST", defaults.host),
            chain_id=_parse_int(env, "POLYCLOB_CHAIN_ID", defaults.chain_id),
            request_timeout_sec=_parse_float(
                env, "POLYCLOB_REQUEST_TIMEOUT_SEC", defaults.request_timeout_sec
            ),
            require_nonce=_parse_bool(env, "POLYCLOB_REQUIRE_NONCE", defaults.require_nonce),
            signature_type=SignatureType(
                env.get("POLYCLOB_SIGNATURE_TYPE", defaults.signature_type.value)
            ),
        )


def load_credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[ApiCredentials]:
    """L2 credentials из окружения.

    Returns:
        ApiCredentials или None, если ни одна переменная не задана

    Raises:
        ValueError: Если заданы не все три переменные
    """
    env = os.environ if environ is None else environ
    names = ("POLYCLOB_API_KEY", "POLYCLOB_API_SECRET", "POLYCLOB_API_PASSPHRASE")
    values = [env.get(name, "") for name in names]

    if not any(values):
        return None

    missing = [name for name, value in zip(names, values) if not value]
    if missing:
        raise ValueError(f"incomplete API credentials, missing: {', '.join(missing)}")

    api_key, secret, passphrase = values
    return ApiCredentials(api_key=api_key, secret=secret, passphrase=passphrase)


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
