from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_BOOKS_CSV = "BibleData-Book.csv"
DEFAULT_VERSES_CSV = "AlamoPolyglot.csv"
DEFAULT_STRONGS_CSV = "HebrewStrongs.csv"

@dataclass(frozen=True)
class Settings:
    data_dir: Path
    books_csv: str = DEFAULT_BOOKS_CSV
    verses_csv: str = DEFAULT_VERSES_CSV
    strongs_csv: str = DEFAULT_STRONGS_CSV
    books_gdrive_id: Optional[str] = None
    verses_gdrive_id: Optional[str] = None
    strongs_gdrive_id: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        e = os.environ if env is None else env
        return cls(
            data_dir=Path(e.get("BIBLE_DATA_DIR", ".")),
            books_csv=e.get("BOOKS_CSV", DEFAULT_BOOKS_CSV),
            verses_csv=e.get("VERSES_CSV", DEFAULT_VERSES_CSV),
            strongs_csv=e.get("STRONGS_CSV", DEFAULT_STRONGS_CSV),
            books_gdrive_id=e.get("BOOKS_GDRIVE_ID") or None,
            verses_gdrive_id=e.get("VERSES_GDRIVE_ID") or None,
            strongs_gdrive_id=e.get("STRONGS_GDRIVE_ID") or None,
            host=e.get("HOST", "127.0.0.1"),
            port=int(e.get("PORT", "3001")),
            log_level=e.get("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def books_path(self) -> Path:
        return self.data_dir / self.books_csv

    @property
    def verses_path(self) -> Path:
        return self.data_dir / self.verses_csv

    @property
    def strongs_path(self) -> Path:
        return self.data_dir / self.strongs_csv

    def sources(self) -> Dict[Path, Optional[str]]:
        """Source file -> Google Drive id it can be fetched from (if any)."""
        return {
            self.books_path: self.books_gdrive_id,
            self.verses_path: self.verses_gdrive_id,
            self.strongs_path: self.strongs_gdrive_id,
        }
