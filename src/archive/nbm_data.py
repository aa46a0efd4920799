"""Parsed contents of an NBM 1D forecast text file."""

from io import StringIO

import pandas as pd

from src.utils.exceptions import ForecastDataError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)


class NBMData:
    """Tabular forecast data for one site and one model run.

    Args:
        df: Forecast table, one row per forecast valid time.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        self.df = df

    @classmethod
    def from_text(cls, text: str) -> "NBMData":
        """Parse the raw CSV text of a forecast file.

        The first row holds column names; surrounding whitespace is trimmed
        from names and values.

        Raises:
            ForecastDataError: If the text is empty or not CSV.
        """
        try:
            df = pd.read_csv(StringIO(text), skipinitialspace=True)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise ForecastDataError(
                "Failed to parse forecast text",
                context={"error": str(e)},
            ) from e

        df.columns = df.columns.str.strip()
        logger.debug(f"Parsed forecast with {len(df)} rows, {len(df.columns)} columns")
        return cls(df)

    @property
    def columns(self) -> list[str]:
        return list(self.df.columns)

    def column(self, name: str) -> pd.Series:
        """Return a forecast column by name.

        Raises:
            ForecastDataError: If there is no such column.
        """
        if name not in self.df.columns:
            raise ForecastDataError(
                f"No column named {name}",
                context={"column": name, "available": self.columns},
            )
        return self.df[name]

    def __len__(self) -> int:
        return len(self.df)
