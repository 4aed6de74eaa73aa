import logging

import httpx
import pytest
from tenacity import wait_none

from pitch_intel.ingest._retry import default_http_retry


class TestDefaultHttpRetry:
    def test_retries_on_transport_error(self) -> None:
        calls: list[int] = []

        @default_http_retry("Test")
        def flaky() -> str:
            calls.append(1)
            if len(calls) < 3:
                raise httpx.TransportError("connection failed")
            return "ok"

        flaky.retry.wait = wait_none()  # type: ignore[attr-defined]
        assert flaky() == "ok"
        assert len(calls) == 3

    def test_retries_on_http_status_error(self) -> None:
        calls: list[int] = []

        @default_http_retry("Test")
        def flaky() -> str:
            calls.append(1)
            if len(calls) < 2:
                raise httpx.HTTPStatusError(
                    "503", request=httpx.Request("GET", "http://x"), response=httpx.Response(503)
                )
            return "ok"

        flaky.retry.wait = wait_none()  # type: ignore[attr-defined]
        assert flaky() == "ok"
        assert len(calls) == 2

    def test_attempts_are_configurable(self) -> None:
        calls: list[int] = []

        @default_http_retry("Test", attempts=2)
        def always_fails() -> str:
            calls.append(1)
            raise httpx.TransportError("down")

        always_fails.retry.wait = wait_none()  # type: ignore[attr-defined]
        with pytest.raises(httpx.TransportError, match="down"):
            always_fails()
        assert len(calls) == 2

    def test_other_errors_are_not_retried(self) -> None:
        calls: list[int] = []

        @default_http_retry("Test")
        def broken() -> str:
            calls.append(1)
            raise ValueError("bad payload")

        with pytest.raises(ValueError):
            broken()
        assert len(calls) == 1

    def test_log_message_includes_label(self, caplog: pytest.LogCaptureFixture) -> None:
        calls: list[int] = []

        @default_http_retry("live feed")
        def flaky() -> str:
            calls.append(1)
            if len(calls) < 2:
                raise httpx.TransportError("oops")
            return "ok"

        flaky.retry.wait = wait_none()  # type: ignore[attr-defined]
        with caplog.at_level(logging.WARNING):
            flaky()

        assert any("Retrying live feed" in msg for msg in caplog.messages)
