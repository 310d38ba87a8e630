"""OTP manager — issues and verifies email one-time codes."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from enum import Enum

from food_order.config import settings
from food_order.otp.codes import generate_code
from food_order.otp.store import InMemoryOtpStore, OtpRecord, OtpStore
from food_order.services.email_service import EmailService, build_otp_email

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class OtpOutcome(str, Enum):
    """Result of a verify call.  Only ``INVALID`` keeps the record alive."""

    VERIFIED = "verified"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    LOCKED_OUT = "locked_out"
    INVALID = "invalid"

    @property
    def message(self) -> str:
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES = {
    OtpOutcome.VERIFIED: "OTP verified",
    OtpOutcome.NOT_FOUND: "OTP expired or not found",
    OtpOutcome.EXPIRED: "OTP expired",
    OtpOutcome.LOCKED_OUT: "Too many failed attempts",
    OtpOutcome.INVALID: "Invalid OTP",
}


class _KeyedLock:
    """One ``asyncio.Lock`` per key, dropped once nobody holds or awaits it."""

    def __init__(self) -> None:
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users == 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def __len__(self) -> int:
        return len(self._locks)


class OtpManager:
    """Gates password reset behind a code sent to the account's email.

    At most one challenge is live per email.  A challenge ends on the
    first of: a correct code, ``max_attempts`` wrong codes, or
    ``ttl_seconds`` elapsed (checked lazily on verify).

    Parameters
    ----------
    store:
        Where records live.  Defaults to a fresh in-memory store.
    email_service:
        Transport with ``async send(to_email, subject, html_body) -> bool``.
    clock:
        Returns the current time in seconds.
    code_factory:
        Returns a new code; defaults to :func:`generate_code` using the
        configured length.
    """

    def __init__(
        self,
        store: OtpStore | None = None,
        email_service: EmailService | None = None,
        clock: Clock = time.time,
        ttl_seconds: int | None = None,
        max_attempts: int | None = None,
        code_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store if store is not None else InMemoryOtpStore()
        self._email = email_service if email_service is not None else EmailService()
        self._clock = clock
        self._ttl = settings.otp_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._max_attempts = (
            settings.otp_max_attempts if max_attempts is None else max_attempts
        )
        self._code_factory = code_factory or (
            lambda: generate_code(settings.otp_length, settings.otp_allow_leading_zero)
        )
        self._locks = _KeyedLock()

    async def issue(self, email: str) -> bool:
        """Email a fresh code to *email* and make it the live challenge.

        The record is stored only after the email is sent.  Returns
        ``False`` (leaving any previous record untouched) if delivery fails.
        """
        async with self._locks.hold(email):
            code = self._code_factory()
            subject, html_body = build_otp_email(code, self._ttl)
            sent = await self._email.send(email, subject, html_body)
            if not sent:
                logger.error("OTP email to %s could not be delivered", email)
                return False

            self._store.set(email, OtpRecord(code=code, issued_at=self._clock()))
            logger.info("OTP issued for %s", email)
            return True

    async def verify(self, email: str, code: str) -> OtpOutcome:
        """Check *code* against the live challenge for *email*."""
        async with self._locks.hold(email):
            record = self._store.get(email)
            if record is None:
                logger.info("OTP verify for %s: no live code", email)
                return OtpOutcome.NOT_FOUND

            if self._clock() - record.issued_at > self._ttl:
                self._store.delete(email)
                logger.info("OTP expired for %s", email)
                return OtpOutcome.EXPIRED

            if code == record.code:
                self._store.delete(email)
                logger.info("OTP verified for %s", email)
                return OtpOutcome.VERIFIED

            record.attempts += 1
            if record.attempts >= self._max_attempts:
                self._store.delete(email)
                logger.warning(
                    "OTP locked out for %s after %d failed attempts",
                    email,
                    record.attempts,
                )
                return OtpOutcome.LOCKED_OUT

            self._store.set(email, record)
            logger.info(
                "Invalid OTP for %s (attempt %d of %d)",
                email,
                record.attempts,
                self._max_attempts,
            )
            return OtpOutcome.INVALID
