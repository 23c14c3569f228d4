from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the catalog ingestion pipeline.
    """

    raw_path: Path = Path("artfinder/data/raw/artworks.json")
    processed_data_dir: Path = Path("artfinder/data/processed")
    artworks_filename: str = "artworks.csv"
    artists_filename: str = "artists.csv"
    thumbnail_suffix: str = "!Large.jpg"

    @property
    def artworks_path(self) -> Path:
        return self.processed_data_dir / self.artworks_filename

    @property
    def artists_path(self) -> Path:
        return self.processed_data_dir / self.artists_filename


DEFAULT_INGESTION_CONFIG = IngestionConfig()
