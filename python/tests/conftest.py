"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from tickerdle.puzzle.config import GameSettings
from tickerdle.puzzle.lookup import EntityIndex
from tickerdle.puzzle.schemas import Entity
from tickerdle.puzzle.storage import InMemorySessionStore

PUZZLE_DAY = date(2026, 10, 17)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test's data directory inside tmp_path."""
    home = tmp_path / "home"
    monkeypatch.setenv("TICKERDLE_HOME", str(home))
    for var in (
        "TICKERDLE_ENTITIES_PATH",
        "TICKERDLE_ASOF_PATH",
        "TICKERDLE_SALT",
        "TICKERDLE_MAX_GUESSES",
        "TICKERDLE_TIMEZONE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def entities():
    """Small fictional company list."""
    return [
        Entity(ticker="ACM", name="Acme Corp", sector="Industrials", hq="Springfield",
               founded=1985, price=42, market_cap=5e9, employees=12_000, pe=15),
        Entity(ticker="GBX", name="Globex Corporation", sector="Technology", hq="Cypress Creek",
               founded=1990, price=120, market_cap=80e9, employees=60_000, pe=30),
        Entity(ticker="INI", name="Initech", sector="Technology", hq="Austin",
               founded=1999, price=18, market_cap=2e9, employees=800, pe=None),
        Entity(ticker="BAL", name="Big Acme Ltd", sector="Materials", hq="Springfield",
               founded=1950, price=260, market_cap=300e9, employees=150_000, pe=8),
        Entity(ticker="UMB", name="Umbrella & Sons", sector="Health Care", hq="Raccoon City",
               founded=1880, price=600, market_cap=1.5e12, employees=300_000, pe=60),
        Entity(ticker="HOOL", name="Hooli", sector="Technology", hq="Palo Alto",
               founded=2004, price=75, market_cap=40e9, employees=30_000, pe=None),
        Entity(ticker="STRK", name="Stark Industries", sector="Industrials", hq="New York",
               founded=1940, price=320, market_cap=900e9, employees=95_000, pe=22),
        Entity(ticker="WAYN", name="Wayne Enterprises", sector="Industrials", hq="Gotham",
               founded=1889, price=55, market_cap=15e9, employees=52_000, pe=11),
    ]


@pytest.fixture
def index(entities):
    return EntityIndex(entities)


@pytest.fixture
def settings():
    return GameSettings()


@pytest.fixture
def store():
    return InMemorySessionStore()
