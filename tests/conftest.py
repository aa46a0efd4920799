"""Shared pytest fixtures for NBM archive tests."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.archive.archive_client import ArchiveClient
from src.archive.local_store import LocalStore
from src.archive.nbm_store import NBMStore
from src.utils.exceptions import TransportError

SAMPLE_LOCATIONS_CSV = """KMSO,MISSOULA,MT,46.92,-114.09
KBTM,BUTTE,MT,45.95,-112.50
KSLC,SALT LAKE CITY,UT,40.79,-111.97
KBOI, BOISE ,ID, 43.57, -116.22
BAD1,NOWHERE,XX,not-a-lat,-100.0
KMSO,DUPLICATE MISSOULA,MT,0.0,0.0
"""

SAMPLE_FORECAST_CSV = """runtime,validtime,TMP,DPT,WSP
2021-02-28 13:00,2021-02-28 14:00,28,19,7
2021-02-28 13:00,2021-02-28 15:00,31,20,8
2021-02-28 13:00,2021-02-28 16:00,33,20,9
"""


def fake_archive(files: dict[tuple[str, datetime], str]):
    """Build a download_file side effect serving a fixed set of archive files.

    Args:
        files: Mapping of (file name, init time) to file text.

    Returns:
        Callable raising TransportError for anything not in files.
    """

    def download_file(file_name: str, init_time: datetime) -> str:
        try:
            return files[(file_name, init_time)]
        except KeyError:
            raise TransportError(
                "Archive returned HTTP 404",
                context={"file_name": file_name, "status_code": 404},
            ) from None

    return download_file


@pytest.fixture()
def init_time() -> datetime:
    """The initialization time serving a 2021-02-28 15:15 request."""
    return datetime(2021, 2, 28, 13)


@pytest.fixture()
def mock_client(init_time: datetime) -> MagicMock:
    """Create a mock ArchiveClient serving locations and a KMSO forecast."""
    client = MagicMock(spec=ArchiveClient)
    client.download_file.side_effect = fake_archive(
        {
            ("locations.csv", init_time): SAMPLE_LOCATIONS_CSV,
            ("KMSO.csv", init_time): SAMPLE_FORECAST_CSV,
        }
    )
    return client


@pytest.fixture()
def local_store(tmp_path: Path) -> LocalStore:
    """Create a LocalStore in a temporary directory, closed after the test."""
    store = LocalStore.connect(tmp_path / "cache" / "nbm_cache.sqlite3")
    yield store
    store.close()


@pytest.fixture()
def store(local_store: LocalStore, mock_client: MagicMock) -> NBMStore:
    """Create an NBMStore with a real local store and mock client."""
    return NBMStore(local_store=local_store, client=mock_client)
