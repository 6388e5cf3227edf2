"""Async client for the system prompt preview service.

Config editors call :meth:`SystemPromptPreviewClient.schedule` on every edit.
Edits are debounced, at most one request is in flight, and a newer request
supersedes an older one: the older task is cancelled and, if its response
still arrives, it is discarded (last request wins). Failures only populate
``state.error``; the previously rendered preview stays visible until a new
successful response replaces it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from libreclaw.utils.logger import get_logger

logger = get_logger("preview")

PREVIEW_ENDPOINT = "/api/system-prompt/preview"
PREVIEW_DEBOUNCE_SECONDS = 0.3


@dataclass
class PreviewState:
    """What a config editor displays.

    Attributes:
        preview: Last successfully rendered prompt
        loading: A current (not superseded) request is in flight
        error: Message of the most recent failure, cleared when a new request starts
    """

    preview: str = ""
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class PreviewResult:
    prompt: str | None = None
    error: str | None = None


def parse_preview_response(response: httpx.Response) -> PreviewResult:
    """Interpret a preview response, tolerating non-200 statuses and malformed bodies."""
    fallback = f"Preview request failed ({response.status_code})"
    try:
        payload = response.json()
    except ValueError:
        return PreviewResult(error=fallback)

    if not isinstance(payload, dict):
        return PreviewResult(error=fallback)
    prompt = payload.get("prompt")
    if response.is_success and payload.get("ok") is True and isinstance(prompt, str):
        return PreviewResult(prompt=prompt)
    error = payload.get("error")
    return PreviewResult(error=error if isinstance(error, str) and error else fallback)


class SystemPromptPreviewClient:
    """Debounced, last-request-wins preview client.

    :param base_url: Preview service URL, e.g. ``http://127.0.0.1:8787``
    :param client: Existing ``httpx.AsyncClient`` (not closed by this object)
    :param debounce_seconds: Quiet period before a scheduled request is sent

    Examples:
        Inside an editor's event loop::

            async with SystemPromptPreviewClient("http://127.0.0.1:8787") as preview:
                preview.schedule({"prepend": "Be brief."})
                preview.schedule({"prepend": "Be very brief."})  # replaces the first
                await preview.wait()
                print(preview.state.preview or preview.state.error)
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        client: httpx.AsyncClient | None = None,
        debounce_seconds: float = PREVIEW_DEBOUNCE_SECONDS,
        endpoint: str = PREVIEW_ENDPOINT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=10.0)
        self.debounce_seconds = debounce_seconds
        self.endpoint = endpoint
        self.state = PreviewState()

        self._generation = 0
        self._debounce_task: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        """Number of requests started so far; the latest one is the only current one."""
        return self._generation

    def schedule(self, system_prompt: Mapping[str, Any] | None) -> asyncio.Task:
        """Request a preview after the debounce period, replacing any pending schedule.

        Must be called from a running event loop.
        """
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        payload = dict(system_prompt or {})
        self._debounce_task = asyncio.create_task(self._debounced(payload))
        return self._debounce_task

    async def _debounced(self, payload: dict[str, Any]) -> None:
        await asyncio.sleep(self.debounce_seconds)
        await self.request(payload)

    async def request(self, system_prompt: Mapping[str, Any] | None) -> PreviewState:
        """Send a preview request now, superseding any request still in flight.

        Returns:
            The client state after this request finished or was superseded
        """
        self._generation += 1
        generation = self._generation

        prior = self._inflight
        if prior is not None and not prior.done():
            prior.cancel()

        task = asyncio.create_task(self._fetch(generation, dict(system_prompt or {})))
        self._inflight = task
        await asyncio.wait([task])
        if not task.cancelled():
            task.result()
        return self.state

    async def _fetch(self, generation: int, payload: dict[str, Any]) -> None:
        self.state.loading = True
        self.state.error = None

        try:
            response = await self._client.post(self.endpoint, json={"systemPrompt": payload})
            result = parse_preview_response(response)
        except asyncio.CancelledError:
            logger.debug(f"Preview request {generation} superseded")
            raise
        except httpx.HTTPError as e:
            result = PreviewResult(error=str(e) or type(e).__name__)

        if generation != self._generation:
            logger.debug(f"Discarding stale preview result {generation} (current {self._generation})")
            return

        if result.prompt is not None:
            self.state.preview = result.prompt
        else:
            logger.warning(f"Preview failed: {result.error}")
            self.state.error = result.error
        self.state.loading = False

    async def wait(self) -> PreviewState:
        """Wait for the pending scheduled request (if any) and the in-flight request."""
        if self._debounce_task is not None and not self._debounce_task.done():
            await asyncio.wait([self._debounce_task])
        # Read after the debounce finished; it may have started a new request
        if self._inflight is not None and not self._inflight.done():
            await asyncio.wait([self._inflight])
        return self.state

    async def aclose(self) -> None:
        """Cancel pending work and close the HTTP client if this object created it."""
        for task in (self._debounce_task, self._inflight):
            if task is not None and not task.done():
                task.cancel()
                await asyncio.wait([task])
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SystemPromptPreviewClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
