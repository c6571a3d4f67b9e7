"""
Тесты для AuthenticatedRequestDispatcher и заголовков аутентификации

Проверяемые инварианты:
1. l2 без credentials → AuthRequired до обращения к transport
2. l1 без signer → AuthRequired до обращения к transport
3. none: без заголовков аутентификации
4. l1: POLY_* заголовки + Authorization с подписью ClobAuth
5. l2: HMAC считается над той же строкой тела, что уходит в transport
6. Статус >= 400 → RequestFailed с причиной из ответа
"""

import pytest

from polyclob.core.domain import ApiCredentials, ApiRequest, AuthKind, HeaderPayload
from polyclob.core.errors import AuthRequired, RequestFailed, SigningRejected
from polyclob.signing.eip712 import build_clob_auth_typed_data
from polyclob.signing.hmac_signature import build_hmac_signature
from polyclob.transport import (
    AuthenticatedRequestDispatcher,
    create_l1_headers,
    create_l2_headers,
    extract_reason,
)
from tests.fakes import TEST_ADDRESS, TEST_SECRET, FakeSigner, FakeTransport


TIMESTAMP = 1700000000


@pytest.fixture
def credentials():
    return ApiCredentials(api_key="key-1", secret=TEST_SECRET, passphrase="pass-1")


def make_dispatcher(transport, signer=None, credentials=None):
    return AuthenticatedRequestDispatcher(
        transport=transport,
        chain_id=137,
        signer=signer,
        credentials=credentials,
        clock=lambda: TIMESTAMP + 0.75,
    )


# =============================================================================
# ТЕСТЫ: Заголовки
# =============================================================================


class TestHeaders:
    def test_l1_headers(self, fake_signer):
        headers = create_l1_headers(fake_signer, chain_id=137, timestamp=TIMESTAMP, nonce=3)

        typed = build_clob_auth_typed_data(TEST_ADDRESS, 137, TIMESTAMP, 3)
        expected_signature = FakeSigner().sign_typed_data(
            typed.domain, typed.types, typed.primary_type, typed.message
        )
        assert headers == {
            "POLY_ADDRESS": TEST_ADDRESS,
            "POLY_SIGNATURE": expected_signature,
            "POLY_TIMESTAMP": str(TIMESTAMP),
            "POLY_NONCE": "3",
            "Authorization": f"Bearer {expected_signature}",
        }

    def test_l1_signer_rejection(self):
        signer = FakeSigner(error=RuntimeError("declined"))
        with pytest.raises(SigningRejected):
            create_l1_headers(signer, chain_id=137, timestamp=TIMESTAMP)

    def test_l2_headers(self, credentials):
        payload = HeaderPayload(method="DELETE", path="/order", body='{"orderID":"0x1"}')
        headers = create_l2_headers(TEST_ADDRESS, credentials, TIMESTAMP, payload)

        assert headers == {
            "POLY_ADDRESS": TEST_ADDRESS,
            "POLY_SIGNATURE": build_hmac_signature(
                TEST_SECRET, TIMESTAMP, "DELETE", "/order", '{"orderID":"0x1"}'
            ),
            "POLY_TIMESTAMP": str(TIMESTAMP),
            "POLY_API_KEY": "key-1",
            "POLY_PASSPHRASE": "pass-1",
        }


# =============================================================================
# ТЕСТЫ: Dispatcher
# =============================================================================


class TestDispatcherAuth:
    """Классификация запросов по уровню аутентификации."""

    def test_l2_without_credentials_never_sends(self, fake_signer):
        transport = FakeTransport()
        dispatcher = make_dispatcher(transport, signer=fake_signer)

        with pytest.raises(AuthRequired):
            dispatcher.request(ApiRequest(method="GET", path="/data/orders", auth=AuthKind.L2))

        assert transport.sent == []

    def test_l2_without_signer_never_sends(self, credentials):
        transport = FakeTransport()
        dispatcher = make_dispatcher(transport, credentials=credentials)

        with pytest.raises(AuthRequired):
            dispatcher.request(ApiRequest(method="GET", path="/data/orders", auth=AuthKind.L2))

        assert transport.sent == []

    def test_l1_without_signer_never_sends(self):
        transport = FakeTransport()
        dispatcher = make_dispatcher(transport)

        with pytest.raises(AuthRequired):
            dispatcher.request(ApiRequest(method="POST", path="/auth/api-key", auth=AuthKind.L1))

        assert transport.sent == []

    def test_public_request(self):
        transport = FakeTransport()
        transport.respond("GET", "/tick-size", {"minimum_tick_size": 0.01})
        dispatcher = make_dispatcher(transport)

        payload = dispatcher.request(
            ApiRequest(method="get", path="/tick-size", params={"token_id": "1"})
        )

        assert payload == {"minimum_tick_size": 0.01}
        sent = transport.sent[0]
        assert sent["method"] == "GET"
        assert sent["headers"] == {}
        assert sent["params"] == {"token_id": "1"}
        assert sent["data"] is None

    def test_l1_request_headers(self, fake_signer):
        transport = FakeTransport()
        transport.respond("POST", "/auth/api-key", {"apiKey": "k", "secret": "s", "passphrase": "p"})
        dispatcher = make_dispatcher(transport, signer=fake_signer)

        dispatcher.request(
            ApiRequest(method="POST", path="/auth/api-key", auth=AuthKind.L1, l1_nonce=2)
        )

        headers = transport.sent[0]["headers"]
        assert headers["POLY_ADDRESS"] == TEST_ADDRESS
        assert headers["POLY_TIMESTAMP"] == str(TIMESTAMP)
        assert headers["POLY_NONCE"] == "2"
        assert headers["Authorization"] == f"Bearer {headers['POLY_SIGNATURE']}"
        assert fake_signer.calls[0]["message"]["nonce"] == 2

    def test_l2_signs_sent_body(self, fake_signer, credentials):
        transport = FakeTransport()
        transport.respond("DELETE", "/order", {"canceled": ["0x1"]})
        dispatcher = make_dispatcher(transport, signer=fake_signer, credentials=credentials)

        dispatcher.request(
            ApiRequest(method="DELETE", path="/order", auth=AuthKind.L2, body={"orderID": "0x1"})
        )

        sent = transport.sent[0]
        assert sent["data"] == '{"orderID":"0x1"}'
        assert sent["headers"]["POLY_SIGNATURE"] == build_hmac_signature(
            TEST_SECRET, TIMESTAMP, "DELETE", "/order", sent["data"]
        )
        assert sent["headers"]["POLY_API_KEY"] == "key-1"
        assert sent["headers"]["POLY_ADDRESS"] == TEST_ADDRESS

    def test_l2_headers_recomputed_per_request(self, fake_signer, credentials):
        transport = FakeTransport()
        transport.respond("GET", "/data/orders", [])
        ticks = iter([TIMESTAMP, TIMESTAMP + 1])
        dispatcher = AuthenticatedRequestDispatcher(
            transport=transport,
            chain_id=137,
            signer=fake_signer,
            credentials=credentials,
            clock=lambda: next(ticks),
        )

        request = ApiRequest(method="GET", path="/data/orders", auth=AuthKind.L2)
        dispatcher.request(request)
        dispatcher.request(request)

        first, second = (s["headers"] for s in transport.sent)
        assert first["POLY_TIMESTAMP"] != second["POLY_TIMESTAMP"]
        assert first["POLY_SIGNATURE"] != second["POLY_SIGNATURE"]


class TestDispatcherErrors:
    def test_http_error_status(self):
        transport = FakeTransport()
        transport.respond("GET", "/fee-rate", {"error": "market not found"}, status_code=404)
        dispatcher = make_dispatcher(transport)

        with pytest.raises(RequestFailed) as exc_info:
            dispatcher.request(ApiRequest(method="GET", path="/fee-rate"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.reason == "market not found"

    def test_transport_failure_propagates(self):
        transport = FakeTransport()
        transport.fail("GET", "/fee-rate")
        dispatcher = make_dispatcher(transport)

        with pytest.raises(RequestFailed) as exc_info:
            dispatcher.request(ApiRequest(method="GET", path="/fee-rate"))
        assert exc_info.value.status_code is None

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"error": "bad"}, "bad"),
            ({"errorMsg": "not enough balance"}, "not enough balance"),
            ({"message": "oops"}, "oops"),
            ("Bad Gateway", "Bad Gateway"),
            (None, "empty response"),
            ("", "empty response"),
        ],
    )
    def test_extract_reason(self, payload, expected):
        assert extract_reason(payload) == expected
