"""Tests for the poll-until-done loop and its input clamps."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from fakes import FakeClock
from musicgate.errors import PollTimeoutError, UpstreamError
from musicgate.models.job import JobStatus
from musicgate.services.polling import (
    parse_poll_interval_ms,
    parse_timeout_ms,
    poll_until_done,
)

STATUS_URL = "https://api.paxsenix.org/task/abc"


class TestParseTimeout:
    @pytest.mark.parametrize("raw", [None, 0, "0", -5, "-1", "abc", "", [], "nan", "inf", True])
    def test_junk_falls_back_to_default(self, raw) -> None:
        assert parse_timeout_ms(raw) == 300_000

    def test_clamped_to_ceiling(self) -> None:
        assert parse_timeout_ms(10_000_000) == 900_000
        assert parse_timeout_ms("10000000") == 900_000

    def test_in_range_kept(self) -> None:
        assert parse_timeout_ms("60000") == 60_000

    def test_first_of_list_value(self) -> None:
        assert parse_timeout_ms(["120000", "5"]) == 120_000


class TestParsePollInterval:
    def test_below_floor_clamped_up(self) -> None:
        assert parse_poll_interval_ms(100) == 1_000

    def test_above_ceiling_clamped_down(self) -> None:
        assert parse_poll_interval_ms("60000") == 30_000

    @pytest.mark.parametrize("raw", [None, 0, -1, "soon"])
    def test_junk_falls_back_to_default(self, raw) -> None:
        assert parse_poll_interval_ms(raw) == 5_000

    def test_in_range_kept(self) -> None:
        assert parse_poll_interval_ms("2500") == 2_500


class TestPollUntilDone:
    @pytest.mark.asyncio
    async def test_returns_after_done(self) -> None:
        clock = FakeClock()
        fetch = AsyncMock(
            side_effect=[
                {"ok": True, "status": "pending"},
                {"ok": True, "status": "processing"},
                {"ok": True, "status": "done", "records": [{"audio_url": "https://x/a.mp3"}]},
            ]
        )

        status = await poll_until_done(
            fetch, STATUS_URL, "abc", timeout_ms=15_000, interval_ms=5_000,
            sleep=clock.sleep, clock=clock,
        )

        assert fetch.await_count == 3
        assert status.status == JobStatus.done
        assert status.records[0].audio_url == "https://x/a.mp3"
        assert clock.sleeps == [5.0, 5.0]
        fetch.assert_awaited_with(STATUS_URL)

    @pytest.mark.asyncio
    async def test_timeout_after_budget(self) -> None:
        clock = FakeClock()
        fetch = AsyncMock(return_value={"ok": True, "status": "processing"})

        with pytest.raises(PollTimeoutError) as exc_info:
            await poll_until_done(
                fetch, STATUS_URL, "abc", timeout_ms=15_000, interval_ms=5_000,
                sleep=clock.sleep, clock=clock,
            )

        assert fetch.await_count == 3
        err = exc_info.value
        assert err.job_id == "abc"
        assert err.status_url == STATUS_URL
        assert err.last == {"ok": True, "status": "processing"}
        body = err.to_body()
        assert body["status"] == "processing"
        assert body["jobId"] == "abc"
        assert body["task_url"] == STATUS_URL
        assert body["lastResponse"] == {"ok": True, "status": "processing"}

    @pytest.mark.asyncio
    async def test_done_without_ok_keeps_polling(self) -> None:
        clock = FakeClock()
        fetch = AsyncMock(return_value={"status": "done", "ok": False})

        with pytest.raises(PollTimeoutError):
            await poll_until_done(
                fetch, STATUS_URL, "abc", timeout_ms=10_000, interval_ms=1_000,
                sleep=clock.sleep, clock=clock,
            )
        assert fetch.await_count == 10

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self) -> None:
        clock = FakeClock()
        fetch = AsyncMock(
            side_effect=[
                {"ok": True, "status": "pending"},
                UpstreamError("Upstream error", 500, {"message": "boom"}),
            ]
        )

        with pytest.raises(UpstreamError) as exc_info:
            await poll_until_done(
                fetch, STATUS_URL, "abc", timeout_ms=60_000, interval_ms=5_000,
                sleep=clock.sleep, clock=clock,
            )
        assert exc_info.value.status == 500
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_unknown_status_reported_on_timeout(self) -> None:
        clock = FakeClock()
        fetch = AsyncMock(return_value={"weird": True})

        with pytest.raises(PollTimeoutError) as exc_info:
            await poll_until_done(
                fetch, STATUS_URL, "abc", timeout_ms=5_000, interval_ms=5_000,
                sleep=clock.sleep, clock=clock,
            )
        assert exc_info.value.to_body()["status"] == "unknown"
