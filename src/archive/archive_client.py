"""HTTP client for the NBM 1D text file archive."""

from datetime import datetime

import requests

from src.utils.exceptions import TransportError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

BASE_URL = "https://hwp-viz.gsd.esrl.noaa.gov/wave1d/data/archive/"

# Runs after this time are published under the NBM4.0 directory
NBM_4_STARTS = datetime(2020, 9, 23, 0, 0, 0)


def format_file_name_for_download(file_name: str) -> str:
    """Escape a file name for use in an archive URL (only spaces need it)."""
    return file_name.replace(" ", "%20")


def build_download_url(file_name: str, init_time: datetime) -> str:
    """Build the archive URL for a file from a given model run.

    Args:
        file_name: Name of the file, e.g. "locations.csv" or "KMSO.csv".
        init_time: Model initialization time.

    Returns:
        Fully qualified URL of the file.
    """
    schema = "NBM4.0" if init_time > NBM_4_STARTS else "NBM"
    url_fname = format_file_name_for_download(file_name)

    return (
        f"{BASE_URL}{init_time.year:04d}/{init_time.month:02d}/{init_time.day:02d}/"
        f"{schema}/{init_time.hour:02d}/{url_fname}"
    )


class ArchiveClient:
    """Client that downloads text files from the NBM 1D archive.

    A single attempt is made per call; retries are left to the caller.

    Args:
        timeout: Request timeout in seconds. None uses the requests default.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def download_file(self, file_name: str, init_time: datetime) -> str:
        """Download a file from the archive.

        Args:
            file_name: Name of the file to download.
            init_time: Model initialization time the file belongs to.

        Returns:
            The file contents decoded as UTF-8.

        Raises:
            TransportError: On connection errors, timeouts, HTTP errors, or a
                body that is not valid UTF-8.
        """
        url = build_download_url(file_name, init_time)
        logger.info(f"Downloading {file_name} for {init_time:%Y-%m-%d %HZ}")

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.warning(f"Archive HTTP error {response.status_code} for {url}")
            raise TransportError(
                f"Archive returned HTTP {response.status_code}",
                context={"url": url, "status_code": response.status_code},
            ) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Archive request failed for {url}: {e}")
            raise TransportError(
                "Archive request failed",
                context={"url": url, "error": str(e)},
            ) from e

        try:
            text = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(
                "Archive response is not valid UTF-8",
                context={"url": url, "error": str(e)},
            ) from e

        logger.debug(f"Downloaded {len(text)} characters from {url}")
        return text
