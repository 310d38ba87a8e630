"""OTP records and the stores that hold them."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class OtpRecord:
    """One outstanding verification challenge for an email address."""

    code: str
    issued_at: float
    attempts: int = 0


class OtpStore(ABC):
    """Key/value storage for OTP records, keyed by email address.

    The OTP manager is the only writer.  Implementations must be safe to
    call from concurrent request handlers; read-modify-write sequences are
    serialized by the manager itself.
    """

    @abstractmethod
    def get(self, key: str) -> OtpRecord | None:
        """Return the record for *key*, or ``None``."""

    @abstractmethod
    def set(self, key: str, record: OtpRecord) -> None:
        """Store *record* under *key*, replacing any existing one."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the record for *key* if present."""


class InMemoryOtpStore(OtpStore):
    """Process-local store: a dict behind a mutex.

    Nothing is persisted, so a restart drops every outstanding code.
    Records are never swept; expired ones are removed when next verified.
    """

    def __init__(self) -> None:
        self._records: dict[str, OtpRecord] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> OtpRecord | None:
        with self._lock:
            return self._records.get(key)

    def set(self, key: str, record: OtpRecord) -> None:
        with self._lock:
            self._records[key] = record

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
