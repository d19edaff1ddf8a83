"""Shared file handling for the JSON-backed repositories.

Each repository owns one JSON file holding a list of records. All
read-modify-write cycles go through ``transaction()``, which holds a
per-file lock and replaces the file atomically, so a failed write leaves
the previous contents intact and concurrent increments are never lost.

The lock has two layers: a thread lock for callers in this process and a
``<name>.lock`` file lock (``filelock``) for other processes sharing the
same data directory, such as two CLI invocations running at once.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock, Timeout

from bazaar.domain.exceptions import StoreUnavailableError
from bazaar.domain.model.value_objects import DEFAULT_CURRENCY, Money

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10.0

_LOCKS: dict[Path, tuple[threading.RLock, FileLock]] = {}
_LOCKS_GUARD = threading.Lock()


def _locks_for(path: Path) -> tuple[threading.RLock, FileLock]:
    with _LOCKS_GUARD:
        if path not in _LOCKS:
            lock_path = path.with_name(path.name + ".lock")
            _LOCKS[path] = (threading.RLock(), FileLock(str(lock_path)))
        return _LOCKS[path]


class JsonFileStore:

    def __init__(self, file_path: Path, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        self._file_path = file_path.resolve()
        self._lock, self._file_lock = _locks_for(self._file_path)
        self._lock_timeout = lock_timeout
        self._ensure_file()

    def read(self) -> list[dict]:
        with self._locked():
            return self._load_raw()

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the records for in-place editing; persist them on clean exit."""
        with self._locked():
            records = self._load_raw()
            yield records
            self._persist_raw(records)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            try:
                self._file_lock.acquire(timeout=self._lock_timeout)
            except Timeout as exc:
                logger.error("Timed out waiting for %s", self._file_lock.lock_file)
                raise StoreUnavailableError(
                    f"Storage is busy ({self._file_path.name}); please try again"
                ) from exc
            except OSError as exc:
                logger.error("Could not lock %s: %s", self._file_lock.lock_file, exc)
                raise StoreUnavailableError(
                    f"Storage is unavailable ({self._file_path.name}); please try again"
                ) from exc
            try:
                yield
            finally:
                self._file_lock.release()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", self._file_path, exc)
            raise StoreUnavailableError(
                f"Storage is unavailable ({self._file_path.name}); please try again"
            ) from exc

    def _persist_raw(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2, ensure_ascii=False) + "\n"
        try:
            fd, tmp = tempfile.mkstemp(dir=self._file_path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp, self._file_path)
            except BaseException:
                os.unlink(tmp)
                raise
        except OSError as exc:
            logger.error("Could not write %s: %s", self._file_path, exc)
            raise StoreUnavailableError(
                f"Storage is unavailable ({self._file_path.name}); please try again"
            ) from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailableError(
                f"Storage is unavailable ({self._file_path.name}); please try again"
            ) from exc


def next_id(records: list[dict]) -> int:
    if not records:
        return 1
    return max(r["id"] for r in records) + 1


# --- Field codecs -------------------------------------------------------------


def money_to_raw(money: Money | None) -> dict | None:
    if money is None:
        return None
    return {"amount": str(money.amount), "currency": money.currency}


def money_from_raw(raw: dict | None) -> Money | None:
    if raw is None:
        return None
    return Money(Decimal(raw["amount"]), raw.get("currency", DEFAULT_CURRENCY))


def dt_to_raw(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def dt_from_raw(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None
