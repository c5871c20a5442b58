import logging
from pathlib import Path
from typing import List

import gdown

from .config import Settings

logger = logging.getLogger(__name__)

def _present(p: Path) -> bool:
    return p.exists() and p.stat().st_size > 0

def download(gdrive_id: str, dest: Path) -> Path:
    tmp = dest.with_suffix(dest.suffix + ".tmp")
    if tmp.exists():
        tmp.unlink()

    url = f"https://drive.google.com/uc?id={gdrive_id}"
    logger.info("Downloading %s from Google Drive id=%s ...", dest.name, gdrive_id)
    gdown.download(url, str(tmp), quiet=True, fuzzy=True)
    if not _present(tmp):
        raise RuntimeError(
            f"Download of {dest.name} produced no data. "
            "Check Google Drive sharing: Anyone with the link."
        )
    tmp.replace(dest)
    logger.info("Downloaded: %s (%d bytes)", dest, dest.stat().st_size)
    return dest

def ensure_data(settings: Settings) -> List[Path]:
    """
    Ensures the books, verses and Strong's CSV files exist and are non-empty.
    Missing files are fetched via gdown when a Drive id is configured for them.
    """
    paths: List[Path] = []
    for path, gdrive_id in settings.sources().items():
        if _present(path):
            logger.info("Data OK: %s (%d bytes)", path, path.stat().st_size)
        elif gdrive_id:
            path.parent.mkdir(parents=True, exist_ok=True)
            download(gdrive_id, path)
        else:
            raise FileNotFoundError(f"Missing data file {path} and no Google Drive id configured for it")
        paths.append(path)
    return paths
