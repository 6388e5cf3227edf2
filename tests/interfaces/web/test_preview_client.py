"""Tests for the debounced, last-request-wins preview client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from libreclaw.interfaces.web.preview_client import (
    PREVIEW_ENDPOINT,
    PreviewState,
    SystemPromptPreviewClient,
    parse_preview_response,
)


def echo_handler(calls: list):
    """Mock preview service that renders the prepend text as the prompt."""

    async def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        calls.append(body)
        prepend = body["systemPrompt"].get("prepend", "")
        if prepend == "invalid":
            return httpx.Response(400, json={"ok": False, "error": "Invalid system prompt section ID 'x'"})
        return httpx.Response(200, json={"ok": True, "prompt": f"PROMPT:{prepend}"})

    return handler


def make_client(handler, **kwargs) -> SystemPromptPreviewClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://preview.test")
    return SystemPromptPreviewClient(client=http, **kwargs)


class TestParsePreviewResponse:
    """Test interpretation of preview responses."""

    def test_success(self):
        result = parse_preview_response(httpx.Response(200, json={"ok": True, "prompt": "text"}))
        assert result.prompt == "text"
        assert result.error is None

    def test_error_body(self):
        result = parse_preview_response(httpx.Response(400, json={"ok": False, "error": "bad id"}))
        assert result.prompt is None
        assert result.error == "bad id"

    def test_non_json_body(self):
        result = parse_preview_response(httpx.Response(502, text="<html>Bad Gateway</html>"))
        assert result.error == "Preview request failed (502)"

    @pytest.mark.parametrize(
        "payload",
        [[1, 2], {"ok": True}, {"ok": True, "prompt": 3}, {"prompt": "x"}, {"ok": False, "error": ""}],
    )
    def test_malformed_payload(self, payload):
        result = parse_preview_response(httpx.Response(200, json=payload))
        assert result.prompt is None
        assert result.error == "Preview request failed (200)"

    def test_ok_body_with_error_status_is_failure(self):
        result = parse_preview_response(httpx.Response(500, json={"ok": True, "prompt": "x"}))
        assert result.prompt is None


class TestPreviewRequests:
    """Test immediate requests and error-state handling."""

    @pytest.mark.asyncio
    async def test_successful_request_updates_preview(self):
        calls = []
        preview = make_client(echo_handler(calls))

        state = await preview.request({"prepend": "hello"})

        assert state == PreviewState(preview="PROMPT:hello", loading=False, error=None)
        assert calls == [{"systemPrompt": {"prepend": "hello"}}]
        assert preview.generation == 1

    @pytest.mark.asyncio
    async def test_posts_to_preview_endpoint(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={"ok": True, "prompt": "x"})

        await make_client(handler).request(None)
        assert seen == [PREVIEW_ENDPOINT]

    @pytest.mark.asyncio
    async def test_error_keeps_previous_preview(self):
        preview = make_client(echo_handler([]))
        await preview.request({"prepend": "good"})

        state = await preview.request({"prepend": "invalid"})

        assert state.preview == "PROMPT:good"
        assert state.error == "Invalid system prompt section ID 'x'"
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_next_success_clears_error(self):
        preview = make_client(echo_handler([]))
        await preview.request({"prepend": "invalid"})
        assert preview.state.error

        state = await preview.request({"prepend": "fixed"})
        assert state.error is None
        assert state.preview == "PROMPT:fixed"

    @pytest.mark.asyncio
    async def test_network_error_captured(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        preview = make_client(handler)
        preview.state.preview = "earlier"

        state = await preview.request({})

        assert state.error == "connection refused"
        assert state.preview == "earlier"
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_server_error_without_json(self):
        preview = make_client(lambda request: httpx.Response(500, text="Internal Server Error"))
        state = await preview.request({})
        assert state.error == "Preview request failed (500)"
        assert state.preview == ""


class TestLastRequestWins:
    """Test supersession of in-flight requests."""

    @pytest.mark.asyncio
    async def test_newer_request_cancels_older(self):
        release_slow = asyncio.Event()
        started = asyncio.Event()

        async def handler(request):
            body = json.loads(request.content)
            prepend = body["systemPrompt"]["prepend"]
            if prepend == "slow":
                started.set()
                await release_slow.wait()
            return httpx.Response(200, json={"ok": True, "prompt": prepend})

        preview = make_client(handler)
        first = asyncio.create_task(preview.request({"prepend": "slow"}))
        await started.wait()
        assert preview.state.loading is True

        state = await preview.request({"prepend": "fast"})
        release_slow.set()
        await first

        assert state.preview == "fast"
        assert preview.state.preview == "fast"
        assert preview.generation == 2

    @pytest.mark.asyncio
    async def test_stale_result_discarded(self):
        preview = make_client(echo_handler([]))
        preview.state.preview = "current"
        # A newer request has started since generation 1 was sent
        preview._generation = 2

        await preview._fetch(1, {"prepend": "stale"})

        assert preview.state.preview == "current"


class TestDebounce:
    """Test debounced scheduling."""

    @pytest.mark.asyncio
    async def test_rapid_edits_send_one_request(self):
        calls = []
        preview = make_client(echo_handler(calls), debounce_seconds=0.05)

        preview.schedule({"prepend": "a"})
        preview.schedule({"prepend": "ab"})
        preview.schedule({"prepend": "abc"})
        state = await preview.wait()

        assert calls == [{"systemPrompt": {"prepend": "abc"}}]
        assert state.preview == "PROMPT:abc"

    @pytest.mark.asyncio
    async def test_nothing_sent_before_debounce_elapses(self):
        calls = []
        preview = make_client(echo_handler(calls), debounce_seconds=10)
        preview.schedule({"prepend": "a"})
        await asyncio.sleep(0.01)
        assert calls == []
        await preview.aclose()

    @pytest.mark.asyncio
    async def test_wait_without_pending_work(self):
        preview = make_client(echo_handler([]))
        assert await preview.wait() == PreviewState()


class TestLifecycle:
    """Test client ownership and shutdown."""

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        async with SystemPromptPreviewClient("http://preview.test") as preview:
            http = preview._client
        assert http.is_closed

    @pytest.mark.asyncio
    async def test_external_client_left_open(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(echo_handler([])))
        async with SystemPromptPreviewClient(client=http):
            pass
        assert not http.is_closed
        await http.aclose()
