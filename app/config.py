"""
Runtime settings for the catalogue API.

Values come from environment variables, optionally loaded from a
``.env`` file in the working directory. Logging is configured here so
that messages emitted while the catalogue loads at import time already
use ``LOG_LEVEL``.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CATALOG_FILE = Path(__file__).resolve().parent / "data" / "products.json"


@dataclass(frozen=True)
class Settings:
    catalog_file: Path = DEFAULT_CATALOG_FILE
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment, keeping defaults for unset values."""
        catalog_file = os.getenv("CATALOG_FILE")
        return cls(
            catalog_file=Path(catalog_file) if catalog_file else DEFAULT_CATALOG_FILE,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )


settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
