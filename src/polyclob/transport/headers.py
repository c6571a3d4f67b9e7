"""
Auth Headers — заголовки L1 и L2 аутентификации

Имена заголовков — внешний контракт с биржей.

L1 (подпись кошелька, ClobAuth):
    POLY_ADDRESS, POLY_SIGNATURE, POLY_TIMESTAMP, POLY_NONCE
    + Authorization: Bearer <signature>

L2 (API credentials, HMAC):
    POLY_ADDRESS, POLY_SIGNATURE, POLY_TIMESTAMP, POLY_API_KEY, POLY_PASSPHRASE
"""

from typing import Dict, Final

from polyclob.core.domain.credentials import ApiCredentials, HeaderPayload
from polyclob.signing.eip712 import build_clob_auth_typed_data
from polyclob.signing.hmac_signature import build_hmac_signature
from polyclob.signing.signer import MessageSigner, sign_typed_data


POLY_ADDRESS: Final[str] = "POLY_ADDRESS"
POLY_SIGNATURE: Final[str] = "POLY_SIGNATURE"
POLY_TIMESTAMP: Final[str] = "POLY_TIMESTAMP"
POLY_NONCE: Final[str] = "POLY_NONCE"
POLY_API_KEY: Final[str] = "POLY_API_KEY"
POLY_PASSPHRASE: Final[str] = "POLY_PASSPHRASE"
AUTHORIZATION: Final[str] = "Authorization"


def create_l1_headers(
    signer: MessageSigner,
    chain_id: int,
    timestamp: int,
    nonce: int = 0,
) -> Dict[str, str]:
    """
    L1 заголовки: подпись ClobAuth аттестации.

    Raises:
        SigningRejected: Если signer отказал
    """
    typed_data = build_clob_auth_typed_data(
        address=signer.address,
        chain_id=chain_id,
        timestamp=timestamp,
        nonce=nonce,
    )
    signature = sign_typed_data(signer, typed_data)
    return {
        POLY_ADDRESS: signer.address,
        POLY_SIGNATURE: signature,
        POLY_TIMESTAMP: str(timestamp),
        POLY_NONCE: str(nonce),
        AUTHORIZATION: f"Bearer {signature}",
    }


def create_l2_headers(
    address: str,
    credentials: ApiCredentials,
    timestamp: int,
    payload: HeaderPayload,
) -> Dict[str, str]:
    """
    L2 заголовки: HMAC подпись запроса API секретом.

    Raises:
        AuthRequired: Если секрет не декодируется
    """
    signature = build_hmac_signature(
        secret=credentials.secret,
        timestamp=timestamp,
        method=payload.method,
        path=payload.path,
        body=payload.body,
    )
    return {
        POLY_ADDRESS: address,
        POLY_SIGNATURE: signature,
        POLY_TIMESTAMP: str(timestamp),
        POLY_API_KEY: credentials.api_key,
        POLY_PASSPHRASE: credentials.passphrase,
    }
