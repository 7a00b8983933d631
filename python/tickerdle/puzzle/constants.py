"""Constants for the daily puzzle."""

from datetime import date

GAME_NAME: str = "Tickerdle"
SHARE_URL: str = "https://tickerdle.app"

DEFAULT_MAX_GUESSES: int = 8
DEFAULT_SUGGESTION_LIMIT: int = 8

# Changing the salt or the epoch reshuffles every past and future puzzle.
SCHEDULE_SALT: str = "tickerdle-v1"
SCHEDULE_EPOCH: date = date(1970, 1, 1)
REFERENCE_TIMEZONE: str = "America/New_York"

STORAGE_KEY: str = "tickerdle_state_v1"

DATA_DIR_NAME: str = "data"
SESSIONS_DIR_NAME: str = "sessions"
ENTITIES_FILE_NAME: str = "companies.json"
ASOF_FILE_NAME: str = "data_asof.json"

CATEGORICAL_ATTRIBUTES: tuple[str, ...] = ("sector", "hq")
NUMERIC_ATTRIBUTES: tuple[str, ...] = (
    "founded",
    "price",
    "market_cap",
    "employees",
    "pe",
)
COMPARED_ATTRIBUTES: tuple[str, ...] = CATEGORICAL_ATTRIBUTES + NUMERIC_ATTRIBUTES

UNKNOWN_BUCKET_LABEL: str = "N/A"
UNKNOWN_BUCKET_INDEX: int = -1

MATCH_TILE: str = "🟩"
MISS_TILE: str = "⬛"

DEFAULT_BUCKETS: dict[str, list[tuple[str, float]]] = {
    "founded": [
        ("Before 1900", 1900),
        ("1900-1949", 1950),
        ("1950-1979", 1980),
        ("1980-1999", 2000),
        ("2000+", float("inf")),
    ],
    "price": [
        ("Under $25", 25),
        ("$25-$50", 50),
        ("$50-$100", 100),
        ("$100-$250", 250),
        ("$250-$500", 500),
        ("$500+", float("inf")),
    ],
    "market_cap": [
        ("Under $10B", 10e9),
        ("$10B-$50B", 50e9),
        ("$50B-$200B", 200e9),
        ("$200B-$1T", 1e12),
        ("$1T+", float("inf")),
    ],
    "employees": [
        ("Under 10K", 10_000),
        ("10K-50K", 50_000),
        ("50K-100K", 100_000),
        ("100K-250K", 250_000),
        ("250K+", float("inf")),
    ],
    "pe": [
        ("Under 10", 10),
        ("10-20", 20),
        ("20-30", 30),
        ("30-50", 50),
        ("50+", float("inf")),
    ],
}
