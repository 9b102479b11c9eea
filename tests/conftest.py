"""Shared fixtures for uika tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from uika.colors import Rgb
from uika.countdown import Countdown, CountdownList

UTC = timezone.utc


@pytest.fixture
def now() -> datetime:
    return datetime(2029, 12, 31, 23, 59, 0, tzinfo=UTC)


@pytest.fixture
def launch() -> Countdown:
    return Countdown(
        name="Launch",
        target_time=datetime(2030, 1, 1, tzinfo=UTC),
        background_color=Rgb(255, 0, 0),
        foreground_color=Rgb(255, 255, 255),
    )


@pytest.fixture
def three(launch: Countdown) -> CountdownList:
    return CountdownList(
        entries=[
            launch,
            Countdown("Holiday", datetime(2030, 7, 1, 9, 0, tzinfo=timezone(timedelta(hours=2)))),
            Countdown("Birthday", datetime(2030, 3, 14, tzinfo=UTC), foreground_color=Rgb(0, 0, 255)),
        ]
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config lookups away from the real home directory."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("UIKA_LOG_LEVEL", raising=False)
    return tmp_path / "config" / "uika"
