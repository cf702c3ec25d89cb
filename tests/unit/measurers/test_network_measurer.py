"""Unit tests for NetworkMeasurer event wiring."""

from __future__ import annotations

import pytest

from privacy_perf.data_models import MeasurementResult
from privacy_perf.exceptions import InstrumentationError
from privacy_perf.measurement_types import MeasurementType
from privacy_perf.measurers import NetworkMeasurer


@pytest.fixture
def measurer(fake_context) -> NetworkMeasurer:
    network_measurer = NetworkMeasurer("https://x.test/", fake_context)
    network_measurer.instrument()
    return network_measurer


async def _open_page(fake_context, fake_page_cls, url="https://x.test/"):
    page = await fake_context.add_page(fake_page_cls())
    await page.navigate_main_frame(url)
    return page


class TestInstrumentation:
    def test_measurement_type(self, measurer):
        assert measurer.measurement_type() is MeasurementType.NETWORK

    def test_instrument_twice_is_fatal(self, measurer):
        with pytest.raises(InstrumentationError):
            measurer.instrument()

    @pytest.mark.asyncio
    async def test_top_frame_navigation_creates_page_logger(self, measurer, fake_context, fake_page_cls):
        page = await _open_page(fake_context, fake_page_cls)

        assert measurer.network_logger.logger_for_page(page) is not None
        assert page.listener_count("request") == 1
        assert page.listener_count("response") == 1
        assert page.listener_count("websocket") == 1

    @pytest.mark.asyncio
    async def test_sub_frame_navigation_is_ignored(self, measurer, fake_context, fake_page_cls, fake_frame_cls):
        page = await fake_context.add_page(fake_page_cls("https://x.test/"))

        await page.emit("framenavigated", fake_frame_cls("https://ads.test/frame"))

        assert measurer.network_logger.page_count() == 0

    @pytest.mark.asyncio
    async def test_non_public_top_frame_is_ignored(self, measurer, fake_context, fake_page_cls):
        await _open_page(fake_context, fake_page_cls, "about:blank")

        assert measurer.network_logger.page_count() == 0

    @pytest.mark.asyncio
    async def test_repeat_navigation_of_same_page_is_ignored(self, measurer, fake_context, fake_page_cls):
        page = await _open_page(fake_context, fake_page_cls)

        await page.navigate_main_frame("https://x.test/next")

        assert measurer.network_logger.page_count() == 1
        assert page.listener_count("request") == 1

    @pytest.mark.asyncio
    async def test_pages_open_before_instrumentation_are_watched(self, fake_context, fake_page_cls):
        existing = fake_page_cls()
        fake_context.pages.append(existing)
        network_measurer = NetworkMeasurer("https://x.test/", fake_context)
        network_measurer.instrument()

        await existing.navigate_main_frame("https://x.test/")

        assert network_measurer.network_logger.logger_for_page(existing) is not None


class TestTraffic:
    @pytest.mark.asyncio
    async def test_request_and_response_events_are_recorded(
        self, measurer, fake_context, fake_page_cls, fake_request_cls, fake_response_cls
    ):
        page = await _open_page(fake_context, fake_page_cls)
        request = fake_request_cls("https://x.test/app.js", resource_type="script")

        await page.emit("request", request)
        await page.emit("response", fake_response_cls(request))

        page_logger = measurer.network_logger.logger_for_page(page)
        assert [d.url for d in page_logger.requests] == ["https://x.test/app.js"]
        assert [d.url for d in page_logger.responses] == ["https://x.test/app.js"]

    @pytest.mark.asyncio
    async def test_websocket_frames_are_routed_by_direction(
        self, measurer, fake_context, fake_page_cls, fake_websocket_cls
    ):
        page = await _open_page(fake_context, fake_page_cls)
        websocket = fake_websocket_cls("wss://x.test/live")

        await page.emit("websocket", websocket)
        await websocket.emit("framesent", "hello")
        await websocket.emit("framereceived", b"\x01\x02\x03")

        page_logger = measurer.network_logger.logger_for_page(page)
        assert [(d.size, d.type, d.url) for d in page_logger.requests] == [(5, "websocket", "wss://x.test/live")]
        assert [(d.size, d.type, d.url) for d in page_logger.responses] == [(3, "websocket", "wss://x.test/live")]

    @pytest.mark.asyncio
    async def test_init_navigation_response_is_recorded(
        self, measurer, fake_context, fake_page_cls, fake_request_cls, fake_response_cls
    ):
        page = await _open_page(fake_context, fake_page_cls)

        result = await measurer.add_init_navigation_response(page, fake_response_cls(fake_request_cls("https://x.test/")))

        assert result is not None
        assert result.request.url == "https://x.test/"

    @pytest.mark.asyncio
    async def test_navigation_request_seen_live_is_not_duplicated(
        self, measurer, fake_context, fake_page_cls, fake_request_cls, fake_response_cls
    ):
        page = await _open_page(fake_context, fake_page_cls)
        request = fake_request_cls("https://x.test/")
        response = fake_response_cls(request)
        await page.emit("request", request)
        await page.emit("response", response)

        await measurer.add_init_navigation_response(page, response)

        page_logger = measurer.network_logger.logger_for_page(page)
        assert len(page_logger.requests) == 1
        assert len(page_logger.responses) == 1


class TestCloseAndCollect:
    @pytest.mark.asyncio
    async def test_close_unsubscribes_and_closes_logger(self, measurer, fake_context, fake_page_cls):
        page = await _open_page(fake_context, fake_page_cls)

        assert measurer.close() is True

        assert measurer.network_logger.is_closed() is True
        assert page.listener_count("request") == 0
        assert page.listener_count("framenavigated") == 0
        assert fake_context.listener_count("page") == 0
        assert fake_context.listener_count("close") == 1

    @pytest.mark.asyncio
    async def test_collect_closes_and_returns_session_report(
        self, measurer, fake_context, fake_page_cls, fake_request_cls
    ):
        page = await _open_page(fake_context, fake_page_cls)
        await page.emit("request", fake_request_cls("https://x.test/"))

        result = await measurer.collect()

        assert isinstance(result, MeasurementResult)
        assert result.type is MeasurementType.NETWORK
        assert measurer.lifecycle.is_closed is True
        assert result.data["meta"]["endTime"] is not None
        assert len(result.data["pages"]) == 1
        assert len(result.data["pages"][0]["requests"]) == 1

    @pytest.mark.asyncio
    async def test_collect_after_close_keeps_first_close(self, measurer):
        measurer.close()
        end_time = measurer.network_logger.end_time

        await measurer.collect()

        assert measurer.network_logger.end_time == end_time
