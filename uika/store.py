import csv
import logging
import os
from pathlib import Path
from typing import List, Union

from .config import DEFAULT_COUNTDOWNS_FILE
from .countdown import CountdownList
from .errors import ParseError, StoreError

DEFAULT_FILENAME = DEFAULT_COUNTDOWNS_FILE

logger = logging.getLogger(__name__)


def default_path() -> Path:
    return Path.cwd() / DEFAULT_FILENAME


def _read_records(f) -> List[List[str]]:
    records: List[List[str]] = []
    try:
        for record in csv.reader(f):
            records.append(record)
    except csv.Error as exc:
        raise ParseError(len(records) + 1, None, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(len(records) + 1, None, f"not valid UTF-8: {exc}") from exc
    return records


def load(path: Union[str, Path]) -> CountdownList:
    """Read the countdown file at ``path``.

    A missing file is a normal first run and yields an empty list. Any other
    I/O problem raises StoreError; a malformed row raises ParseError.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            records = _read_records(f)
    except FileNotFoundError:
        logger.info("no countdown file at %s, starting empty", path)
        return CountdownList()
    except OSError as exc:
        raise StoreError(path, exc) from exc
    countdowns = CountdownList.load(records)
    logger.info("loaded %d countdowns from %s", len(countdowns), path)
    return countdowns


def save(countdowns: CountdownList, path: Union[str, Path]) -> None:
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(countdowns.to_records())
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise StoreError(path, exc) from exc
    logger.info("saved %d countdowns to %s", len(countdowns), path)
