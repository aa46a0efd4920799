"""Store that coordinates the local cache and archive downloads."""

from datetime import datetime, timedelta
from pathlib import Path

from src.archive.archive_client import ArchiveClient
from src.archive.config import ArchiveConfig
from src.archive.init_time import calculate_initialization_time
from src.archive.local_store import LocalStore
from src.archive.nbm_data import NBMData
from src.archive.site_resolver import SiteValidation, resolve_site
from src.utils.exceptions import (
    DataNotAvailable,
    DecodeError,
    InitializationTimeNotAvailable,
    StoreError,
    TransportError,
)
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

LOCATIONS_FILE = "locations.csv"
MAX_ATTEMPTS = 20


class NBMStore:
    """The interface to our storage for NBM 1D text files.

    Data missing from the local store is fetched from the archive and a copy
    kept locally for faster retrieval later.

    Args:
        local_store: Local cache of downloaded files.
        client: Client for archive downloads.
        max_attempts: Limit on how many initialization times
            validate_most_recent_available tries.
    """

    def __init__(
        self,
        local_store: LocalStore,
        client: ArchiveClient,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self.local_store = local_store
        self.client = client
        self.max_attempts = max_attempts

    @classmethod
    def connect(
        cls, path: Path | None = None, config: ArchiveConfig | None = None
    ) -> "NBMStore":
        """Connect to a store backed by the local database at path.

        Args:
            path: Database file for the local store. Falls back to the
                configured path, then the platform default.
            config: Archive settings; defaults plus env overrides if None.

        Raises:
            StoreError: If the local store can't be opened.
        """
        config = config or ArchiveConfig()
        db_path = path if path is not None else config.resolved_cache_path

        local_store = LocalStore.connect(db_path)
        client = ArchiveClient(timeout=config.request_timeout)

        logger.info(f"Using local store {db_path}")
        return cls(local_store, client, max_attempts=config.max_attempts)

    def close(self) -> None:
        """Release the local store."""
        self.local_store.close()

    def __enter__(self) -> "NBMStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_or_cache(self, file_name: str, init_time: datetime) -> str | None:
        """Get a file from the local store, downloading it on a miss.

        Local store failures are treated as a miss on read and ignored on
        write.

        Args:
            file_name: Name of the file in the archive.
            init_time: Model initialization time of the file.

        Returns:
            The file text, or None if it is neither stored nor downloadable.

        Raises:
            DecodeError: If the stored copy is not valid UTF-8.
        """
        try:
            cached = self.local_store.retrieve_file(file_name, init_time)
        except StoreError as e:
            logger.warning(f"Local store read failed, treating as miss: {e}")
            cached = None

        if cached is not None:
            logger.debug(f"Cache hit for {file_name} at {init_time}")
            try:
                return cached.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(
                    "Stored file is not valid UTF-8",
                    context={"file_name": file_name, "init_time": init_time.isoformat()},
                ) from e

        # Cache miss, go to the archive
        try:
            text = self.client.download_file(file_name, init_time)
        except TransportError as e:
            logger.warning(f"{file_name} unavailable for {init_time}: {e}")
            return None

        try:
            self.local_store.add_file(file_name, init_time, text.encode("utf-8"))
        except StoreError as e:
            logger.warning(f"Could not cache {file_name}: {e}")

        return text

    def validate_request(self, site: str, request_time: datetime) -> SiteValidation:
        """Validate a request.

        Finds the closest initialization time prior to the request time and
        the single site matching the query.

        Raises:
            InitializationTimeNotAvailable: If no locations table exists for
                the initialization time.
            NoMatch: If no site matches.
            AmbiguousSite: If several sites match.
        """
        init_time = calculate_initialization_time(request_time)

        locations = self.fetch_or_cache(LOCATIONS_FILE, init_time)
        if locations is None:
            raise InitializationTimeNotAvailable(init_time)

        site_info = resolve_site(site, locations)
        logger.info(f"Validated '{site}' as {site_info.id} at {init_time}")
        return SiteValidation(site=site_info, initialization_time=init_time)

    def validate_most_recent_available(
        self, site: str, request_time: datetime
    ) -> SiteValidation:
        """Validate a request, going back in time until data is found.

        Behaves like validate_request, except an unavailable initialization
        time makes it try again an hour before that run, up to max_attempts
        times. Other errors are raised immediately.
        """
        attempts_left = self.max_attempts
        attempt_time = request_time

        while True:
            try:
                return self.validate_request(site, attempt_time)
            except InitializationTimeNotAvailable as e:
                attempts_left -= 1
                if attempts_left < 1:
                    logger.error(
                        f"No available data in {self.max_attempts} runs before {request_time}"
                    )
                    raise
                logger.debug(f"{e.message}, trying an earlier run")
                attempt_time = e.init_time - timedelta(hours=1)

    def retrieve(self, validation: SiteValidation) -> str:
        """Load the raw forecast text for a validated request.

        Raises:
            DataNotAvailable: If the file is not stored and can't be downloaded.
            DecodeError: If the stored copy is not valid UTF-8.
        """
        file_name = validation.file_name
        text = self.fetch_or_cache(file_name, validation.initialization_time)
        if text is None:
            raise DataNotAvailable(file_name, validation.initialization_time)
        return text

    def retrieve_data(self, validation: SiteValidation) -> NBMData:
        """Load and parse the forecast for a validated request."""
        return NBMData.from_text(self.retrieve(validation))
