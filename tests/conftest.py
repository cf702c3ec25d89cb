"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import inspect
import os
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

import pytest

# Set required environment variables for tests
os.environ.setdefault("PERF_LOG_LEVEL", "info")


class FakeEmitter:
    """Minimal stand-in for Playwright's event emitter surface."""

    def __init__(self) -> None:
        self.listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners[event].append(handler)

    def remove_listener(self, event: str, handler: Callable[..., Any]) -> None:
        self.listeners[event].remove(handler)

    def listener_count(self, event: str) -> int:
        return len(self.listeners[event])

    async def emit(self, event: str, *args: Any) -> None:
        for handler in list(self.listeners[event]):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result


class FakeRequest:
    """In-memory Playwright request with sizes, timing and redirect link."""

    def __init__(
        self,
        url: str,
        *,
        resource_type: str = "document",
        request_headers_size: int = 100,
        request_body_size: int = 20,
        response_headers_size: int = 200,
        response_body_size: int = 3896,
        start_time: float = 1_000_000.0,
        request_start: float = 5.0,
        response_end: float = 50.0,
        redirected_from: Optional["FakeRequest"] = None,
    ) -> None:
        self.url = url
        self.resource_type = resource_type
        self.redirected_from = redirected_from
        self.timing = {
            "startTime": start_time,
            "requestStart": request_start,
            "responseEnd": response_end,
        }
        self._sizes = {
            "requestHeadersSize": request_headers_size,
            "requestBodySize": request_body_size,
            "responseHeadersSize": response_headers_size,
            "responseBodySize": response_body_size,
        }
        self.sizes_calls = 0
        self.before_sizes: Optional[Callable[[], Any]] = None

    async def sizes(self) -> Dict[str, int]:
        self.sizes_calls += 1
        if self.before_sizes is not None:
            result = self.before_sizes()
            if inspect.isawaitable(result):
                await result
        return dict(self._sizes)


class FakeResponse:
    def __init__(self, request: FakeRequest, url: Optional[str] = None) -> None:
        self.request = request
        self.url = url if url is not None else request.url


class FakeFrame:
    def __init__(self, url: str) -> None:
        self.url = url


class FakeWebSocket(FakeEmitter):
    def __init__(self, url: str) -> None:
        super().__init__()
        self.url = url


class FakePage(FakeEmitter):
    def __init__(self, url: str = "about:blank", evaluate_result: Any = None) -> None:
        super().__init__()
        self.url = url
        self.main_frame = FakeFrame(url)
        self.evaluate_result = evaluate_result
        self.evaluate_calls: List[str] = []
        self.evaluate_error: Optional[BaseException] = None

    async def evaluate(self, script: str) -> Any:
        self.evaluate_calls.append(script)
        if self.evaluate_error is not None:
            raise self.evaluate_error
        return self.evaluate_result

    async def navigate_main_frame(self, url: str) -> None:
        self.url = url
        self.main_frame.url = url
        await self.emit("framenavigated", self.main_frame)


class FakeContext(FakeEmitter):
    def __init__(self, pages: Optional[List[FakePage]] = None) -> None:
        super().__init__()
        self.pages: List[FakePage] = list(pages or [])
        self.closed = False

    async def add_page(self, page: FakePage) -> FakePage:
        self.pages.append(page)
        await self.emit("page", page)
        return page

    async def close(self) -> None:
        self.closed = True
        await self.emit("close", self)


@pytest.fixture
def fake_request_cls():
    return FakeRequest


@pytest.fixture
def fake_response_cls():
    return FakeResponse


@pytest.fixture
def fake_page_cls():
    return FakePage


@pytest.fixture
def fake_frame_cls():
    return FakeFrame


@pytest.fixture
def fake_websocket_cls():
    return FakeWebSocket


@pytest.fixture
def fake_context() -> FakeContext:
    return FakeContext()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove PERF_* variables and cached .env values for the test."""
    from privacy_perf.config import runtime

    for name in list(os.environ):
        if name.startswith("PERF_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", ())
    runtime.reset_default_values()
    yield monkeypatch
    runtime.reset_default_values()
