"""
Base class for delimited text sources.

A loader reads the file an InputConfig describes, retries undecodable
files as Latin-1, and validates the result against its pandera schema
before handing it to the pipeline.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from facilitystats.config.settings import InputConfig
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract loader for one delimited source file.

    Subclasses implement _read for a given encoding; existence checks,
    the encoding fallback and schema validation live here.
    """

    fallback_encoding = "latin-1"

    def __init__(self, settings: InputConfig, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            settings: File location and layout.
            schema: Pandera schema for validation.
        """
        self.settings = settings
        self.schema = schema

    @property
    def path(self) -> Path:
        """Source file."""
        return self.settings.path

    @abstractmethod
    def _read(self, encoding: str) -> pd.DataFrame:
        """Read the source with the given encoding. Implemented by subclasses."""
        ...

    def _load_raw(self) -> pd.DataFrame:
        if not self.path.exists():
            msg = f"Source file not found: {self.path}"
            raise FileNotFoundError(msg)

        try:
            return self._read(self.settings.encoding)
        except UnicodeDecodeError:
            log.warning(
                "Decode failed, retrying",
                path=str(self.path),
                encoding=self.settings.encoding,
                fallback=self.fallback_encoding,
            )
            return self._read(self.fallback_encoding)

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate the source.

        Args:
            validate: Whether to validate against the schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If the source file does not exist.
            pandera.errors.SchemaError: If validation fails.
        """
        log.info("Loading source", loader=type(self).__name__, path=str(self.path))

        df = self._load_raw()
        log.info("Read source", rows=len(df), columns=list(df.columns))

        if validate:
            df = self.schema.validate(df)
            log.debug("Schema validation passed", schema=self.schema.__name__)

        return df
