"""Unit tests for RESTTransport retry, classification and decoding."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from seqledger.client.core import (
    APIError,
    ClientConfig,
    ConnectivityError,
    DecodeError,
    ErrorKind,
    Query,
    RequestRejectedError,
    RetryPolicy,
)
from seqledger.client.models import Account, NewAccount
from seqledger.client.runtime.pagination import ItemSequence
from seqledger.client.runtime.rest import HTTPResponse, RESTTransport
from seqledger.client.runtime.rest.transport import serialize_payload

ACCOUNT = {"id": "alice", "key_ids": ["key-1"], "quorum": 1, "tags": {"type": "vip"}}


def ok(body: dict) -> HTTPResponse:
    return HTTPResponse(status=200, body=json.dumps(body).encode(), headers={"Request-Id": "req-ok"})


def error(status: int, body: dict | None = None, headers: dict | None = None) -> HTTPResponse:
    return HTTPResponse(status=status, body=json.dumps(body or {}).encode(), headers=headers or {})


@pytest.fixture
def transport():
    """Transport with zero backoff and a recorded sleep."""
    t = RESTTransport(
        "https://api.example.com",
        "main",
        credential="secret",
        retry=RetryPolicy(max_attempts=4, base_delay=0.0, max_delay=10.0, jitter=0.0),
        sleep=AsyncMock(),
    )
    t._http.post = AsyncMock()
    return t


class TestTransportRequests:
    """Test request shape."""

    @pytest.mark.asyncio
    async def test_posts_json_to_ledger_scoped_path(self, transport):
        transport._http.post.side_effect = [ok(ACCOUNT)]

        outcome = await transport.invoke("create-account", NewAccount(id="alice"), Account)

        assert outcome.ok
        assert outcome.value == Account(**ACCOUNT)
        assert outcome.attempts == 1
        call = transport._http.post.call_args
        assert call.args[0] == "/main/create-account"
        assert call.kwargs["json"] == {"id": "alice", "key_ids": []}
        assert call.kwargs["headers"]["Content-Type"] == "application/json"
        assert "Idempotency-Key" not in call.kwargs["headers"]

    def test_default_headers_carry_credential(self, transport):
        assert transport._http.headers["Credential"] == "secret"
        assert transport._http.headers["Accept"] == "application/json"

    def test_from_config(self):
        config = ClientConfig(
            ledger_name="books",
            credential="c",
            base_url="https://ledger.example.com/",
            timeout=5.0,
        )
        t = RESTTransport.from_config(config)

        assert t.ledger_name == "books"
        assert t._http.base_url == "https://ledger.example.com"
        assert t._http.timeout.total == 5.0
        assert t._http.headers["User-Agent"] == config.user_agent
        assert t.retry is config.retry


class TestTransportRetry:
    """Test retry eligibility and recovery."""

    @pytest.mark.asyncio
    async def test_idempotent_call_recovers_after_connectivity_failures(self, transport):
        """Two connectivity failures then success returns the success."""
        transport._http.post.side_effect = [
            aiohttp.ClientConnectionError("reset"),
            aiohttp.ClientConnectionError("reset"),
            ok({"items": [], "cursor": "c", "last_page": True}),
        ]

        outcome = await transport.invoke("list-accounts", Query(), dict, idempotent=True)

        assert outcome.ok
        assert outcome.attempts == 3
        assert transport._http.post.call_count == 3
        assert transport._sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout_is_connectivity(self, transport):
        transport._http.post.side_effect = [TimeoutError(), ok({})]

        outcome = await transport.invoke("list-keys", Query(), dict, idempotent=True)

        assert outcome.ok
        assert outcome.attempts == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_report_service_unavailable(self, transport):
        transport._http.post.side_effect = [aiohttp.ClientConnectionError("down")] * 4

        outcome = await transport.invoke("list-accounts", Query(), dict, idempotent=True)

        assert not outcome.ok
        assert outcome.kind == ErrorKind.CONNECTIVITY
        assert outcome.attempts == 4
        assert outcome.error.message == "service unavailable after 4 attempts: down"
        assert transport._http.post.call_count == 4

    @pytest.mark.asyncio
    async def test_malformed_create_is_not_retried(self, transport):
        """A rejected payload fails on the first attempt, even with a key."""
        transport._http.post.side_effect = [
            error(400, {"code": "SEQ706", "message": "invalid quorum"})
        ]

        outcome = await (
            transport.invoke(
                "create-account", NewAccount(id="alice"), Account, idempotency_key="k1"
            )
        )

        assert not outcome.ok
        assert isinstance(outcome.error, RequestRejectedError)
        assert outcome.kind == ErrorKind.MALFORMED_REQUEST
        assert outcome.error.code == "SEQ706"
        assert transport._http.post.call_count == 1
        transport._sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_idempotent_connectivity_failure_surfaces_immediately(self, transport):
        transport._http.post.side_effect = [aiohttp.ClientConnectionError("reset")]

        outcome = await transport.invoke("create-account", NewAccount(), Account)

        assert not outcome.ok
        assert isinstance(outcome.error, ConnectivityError)
        assert outcome.error.message == "reset"
        assert transport._http.post.call_count == 1

    @pytest.mark.asyncio
    async def test_idempotency_key_enables_retry_and_is_resent(self, transport):
        transport._http.post.side_effect = [
            aiohttp.ClientConnectionError("reset"),
            ok(ACCOUNT),
        ]

        outcome = await transport.invoke(
            "create-account", NewAccount(id="alice"), Account, idempotency_key="create-alice"
        )

        assert outcome.ok
        keys = [c.kwargs["headers"]["Idempotency-Key"] for c in transport._http.post.call_args_list]
        assert keys == ["create-alice", "create-alice"]

    @pytest.mark.asyncio
    async def test_overload_status_retried(self, transport):
        transport._http.post.side_effect = [error(503), ok({})]

        outcome = await transport.invoke("list-flavors", Query(), dict, idempotent=True)

        assert outcome.ok
        assert transport._http.post.call_count == 2

    @pytest.mark.asyncio
    async def test_conflict_is_application_error_not_retried(self, transport):
        transport._http.post.side_effect = [error(409, {"code": "SEQ601"})]

        outcome = await transport.invoke("transact", {}, dict, idempotency_key="tx-1")

        assert isinstance(outcome.error, APIError)
        assert outcome.kind == ErrorKind.APPLICATION
        assert transport._http.post.call_count == 1

    @pytest.mark.asyncio
    async def test_body_retryable_flag_overrides_status(self, transport):
        transport._http.post.side_effect = [
            error(500, {"code": "SEQ000", "retriable": True}),
            ok({}),
        ]

        outcome = await transport.invoke("list-actions", Query(), dict, idempotent=True)

        assert outcome.ok
        assert transport._http.post.call_count == 2

    @pytest.mark.asyncio
    async def test_body_flag_can_disable_overload_retry(self, transport):
        transport._http.post.side_effect = [error(503, {"retryable": False})]

        outcome = await transport.invoke("list-actions", Query(), dict, idempotent=True)

        assert not outcome.ok
        assert transport._http.post.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_after_header_sets_delay(self, transport):
        transport._http.post.side_effect = [error(429, headers={"Retry-After": "2"}), ok({})]

        await transport.invoke("list-tokens", Query(), dict, idempotent=True)

        transport._sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_retry_is_logged(self, transport, caplog):
        transport._http.post.side_effect = [error(503), ok({})]

        with caplog.at_level(logging.WARNING, logger="seqledger.client.runtime.rest.transport"):
            await transport.invoke("list-accounts", Query(), dict, idempotent=True)

        retries = [r for r in caplog.records if r.getMessage() == "request_retry"]
        assert len(retries) == 1
        assert retries[0].operation == "list-accounts"
        assert retries[0].attempt == 1


class TestTransportDecoding:
    """Test response decoding and error details."""

    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self, transport):
        transport._http.post.side_effect = [HTTPResponse(status=200, body=b"<html>")]

        outcome = await transport.invoke("list-accounts", Query(), Account, idempotent=True)

        assert isinstance(outcome.error, DecodeError)
        assert transport._http.post.call_count == 1

    @pytest.mark.asyncio
    async def test_shape_mismatch_is_decode_error(self, transport):
        transport._http.post.side_effect = [ok({"id": ""})]

        outcome = await transport.invoke("create-account", NewAccount(), Account)

        assert outcome.kind == ErrorKind.DECODE
        assert outcome.error.request_id == "req-ok"

    @pytest.mark.asyncio
    async def test_request_id_from_header(self, transport):
        transport._http.post.side_effect = [error(400, headers={"Request-Id": "req-9"})]

        outcome = await transport.invoke("create-key", {}, dict)

        assert outcome.error.request_id == "req-9"
        assert outcome.error.status_code == 400
        assert "req-9" in str(outcome.error)

    @pytest.mark.asyncio
    async def test_request_id_falls_back_to_body(self, transport):
        transport._http.post.side_effect = [error(400, {"request_id": "req-body"})]

        outcome = await transport.invoke("create-key", {}, dict)

        assert outcome.error.request_id == "req-body"

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, transport):
        transport._http.post.side_effect = [HTTPResponse(status=502, body=b"Bad Gateway")] * 4

        outcome = await transport.invoke("list-keys", Query(), dict, idempotent=True)

        assert isinstance(outcome.error, APIError)
        assert outcome.error.code == "HTTP502"
        assert outcome.attempts == 4

    @pytest.mark.asyncio
    async def test_unwrap_raises_carried_error(self, transport):
        transport._http.post.side_effect = [error(400, {"message": "bad filter"})]

        outcome = await transport.invoke("list-accounts", Query(filter="x"), dict, idempotent=True)

        with pytest.raises(RequestRejectedError, match="bad filter"):
            outcome.unwrap()

    @pytest.mark.asyncio
    async def test_body_not_utf8_is_decode_error(self, transport):
        """A success body that is not valid UTF-8 comes back as a Failure, not an exception."""
        transport._http.post.side_effect = [
            HTTPResponse(status=200, body=b'{"id": "\xff\xfe"}', headers={"Request-Id": "req-7"})
        ]

        outcome = await transport.invoke("create-account", {}, Account, idempotent=True)

        assert isinstance(outcome.error, DecodeError)
        assert outcome.error.request_id == "req-7"
        assert outcome.error.retryable is False
        assert transport._http.post.call_count == 1

    @pytest.mark.asyncio
    async def test_error_body_not_utf8_still_classified_and_retried(self, transport):
        """An overload status with a Latin-1 HTML body is classified from the status alone."""
        transport._http.post.side_effect = [
            HTTPResponse(status=502, body="<h1>Passerelle café</h1>".encode("latin-1")),
            ok({}),
        ]

        outcome = await transport.invoke("list-keys", Query(), dict, idempotent=True)

        assert outcome.ok
        assert transport._http.post.call_count == 2

    @pytest.mark.asyncio
    async def test_rejected_error_body_not_utf8(self, transport):
        transport._http.post.side_effect = [HTTPResponse(status=400, body=b"\xff\xfe\xfd")]

        outcome = await transport.invoke("create-key", {}, dict)

        assert isinstance(outcome.error, RequestRejectedError)
        assert outcome.error.code == "HTTP400"

    @pytest.mark.asyncio
    async def test_sequence_fails_terminally_on_undecodable_page(self, transport):
        """A page body that cannot be decoded leaves the sequence in its failed state."""
        transport._http.post.side_effect = [HTTPResponse(status=200, body=b"\xff\xfe")]
        seq = ItemSequence(transport, "list-accounts", Query(), Account)

        with pytest.raises(DecodeError):
            await seq.__anext__()
        with pytest.raises(DecodeError):
            await seq.__anext__()

        assert isinstance(seq.error, DecodeError)
        assert transport._http.post.call_count == 1


class TestTransportHooks:
    """Test response hook registration."""

    def test_add_response_hook_registers_on_http_client(self, transport):
        hook = MagicMock(return_value=None)

        transport.add_response_hook(hook)

        assert hook in transport._http._response_hooks


class TestSerializePayload:
    """Test serialize_payload."""

    def test_none_is_empty_object(self):
        assert serialize_payload(None) == {}

    def test_query_uses_wire_form(self):
        assert serialize_payload(Query(cursor="abc")) == {"cursor": "abc"}

    def test_model_drops_unset_optionals(self):
        assert serialize_payload(NewAccount(id="a", quorum=1)) == {
            "id": "a",
            "key_ids": [],
            "quorum": 1,
        }

    def test_mapping_copied(self):
        assert serialize_payload({"a": 1}) == {"a": 1}

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            serialize_payload(42)
