from datetime import date, timedelta

import pytest

from lending import LendingService
from library import Library
from ui_helpers import OUTPUT_MODE_ENV


class FakeClock:
    """Callable stand-in for date.today that tests can move forward."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> None:
        self.today += timedelta(days=days)


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    # set_output_mode writes to os.environ; monkeypatch restores it afterwards
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def clock():
    return FakeClock(date(2024, 3, 1))


@pytest.fixture
def lib():
    return Library()


@pytest.fixture
def seeded_lib():
    return Library(seed=True)


@pytest.fixture
def lending(lib, clock):
    return LendingService(lib, clock, loan_days=14, daily_fine="0.50", max_borrowed=5)
