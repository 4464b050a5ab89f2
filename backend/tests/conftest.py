from __future__ import annotations

import datetime as dt
from typing import Callable, Generator, Optional
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from worklog.main import app
from worklog.models import ScheduleSettings, TimeRecord


@pytest.fixture(scope="session")
def rome() -> ZoneInfo:
    return ZoneInfo("Europe/Rome")


@pytest.fixture()
def schedule() -> ScheduleSettings:
    return ScheduleSettings(mon_thu=8.5, fri=4, sat_sun=0)


@pytest.fixture()
def make_record() -> Callable[..., TimeRecord]:
    def _make(
        category: str,
        start: str,
        end: Optional[str] = None,
        note: str = "",
    ) -> TimeRecord:
        return TimeRecord(
            start_time=dt.datetime.fromisoformat(start),
            end_time=dt.datetime.fromisoformat(end) if end else None,
            category=category,
            note=note,
        )

    return _make


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
