"""Site lookup against the archive's locations table."""

from dataclasses import dataclass
from datetime import datetime
from io import StringIO

import pandas as pd

from src.utils.exceptions import AmbiguousSite, NoMatch
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

# locations.csv has no header row; columns are positional
LOCATION_COLUMNS = ["id", "name", "state_prov", "latitude", "longitude"]


@dataclass(frozen=True)
class SiteInfo:
    """A station listed in the archive's locations table."""

    id: str
    name: str
    state_prov: str
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return (
            f"{self.id:6} {self.latitude:6.2f}, {self.longitude:7.2f}, "
            f"{self.name}, {self.state_prov}"
        )


@dataclass(frozen=True)
class SiteValidation:
    """A request resolved to one site and one available initialization time."""

    site: SiteInfo
    initialization_time: datetime

    @property
    def file_name(self) -> str:
        """Name of the forecast file for this site in the archive."""
        return f"{self.site.id}.csv"


def _parses_as_float(value) -> bool:
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def parse_locations(locations_csv: str) -> list[SiteInfo]:
    """Parse the raw locations table into sites.

    Rows with an unparseable latitude or longitude are skipped, and only the
    first row for each site id is kept.

    Args:
        locations_csv: Raw text of locations.csv.

    Returns:
        Sites in table order.
    """
    if not locations_csv.strip():
        return []

    df = pd.read_csv(
        StringIO(locations_csv),
        header=None,
        names=LOCATION_COLUMNS,
        index_col=False,
        dtype=str,
        keep_default_na=False,
        on_bad_lines="skip",
    )

    # Short rows leave missing fields as NaN
    for col in LOCATION_COLUMNS:
        df[col] = df[col].fillna("").str.strip()

    # "nan" and "inf" are accepted, matching a plain float parse
    parses = df["latitude"].map(_parses_as_float) & df["longitude"].map(_parses_as_float)
    valid = df[parses.astype(bool)]
    skipped = len(df) - len(valid)
    if skipped:
        logger.debug(f"Skipped {skipped} locations rows without a valid lat/lon")

    valid = valid.drop_duplicates(subset="id", keep="first")

    # Stored as single precision like the archive's own tooling
    valid = valid.astype({"latitude": "float32", "longitude": "float32"})

    return [
        SiteInfo(
            id=row.id,
            name=row.name,
            state_prov=row.state_prov,
            latitude=float(row.latitude),
            longitude=float(row.longitude),
        )
        for row in valid.itertuples(index=False)
    ]


def find_matches(query: str, sites: list[SiteInfo]) -> list[SiteInfo]:
    """Fuzzy match: id or name contains the query, or the state equals it."""
    needle = query.lower()
    return [
        site
        for site in sites
        if needle in site.id.lower()
        or needle in site.name.lower()
        or site.state_prov.lower() == needle
    ]


def resolve_site(query: str, locations_csv: str) -> SiteInfo:
    """Resolve a free-text site query to exactly one site.

    An exact (case-insensitive) id match wins outright. Otherwise the query is
    fuzzy matched against ids, names and state/province codes.

    Args:
        query: Site id, part of a site name, or a state abbreviation.
        locations_csv: Raw text of locations.csv.

    Returns:
        The single matching site.

    Raises:
        NoMatch: If nothing matches the query.
        AmbiguousSite: If the fuzzy match finds more than one site.
    """
    sites = parse_locations(locations_csv)
    needle = query.strip().lower()

    for site in sites:
        if site.id.lower() == needle:
            logger.debug(f"Exact id match for '{query}': {site.id}")
            return site

    matches = find_matches(query.strip(), sites)

    if not matches:
        raise NoMatch(query)
    if len(matches) > 1:
        logger.info(f"Site query '{query}' matched {len(matches)} sites")
        raise AmbiguousSite(matches)

    logger.debug(f"Fuzzy match for '{query}': {matches[0].id}")
    return matches[0]
