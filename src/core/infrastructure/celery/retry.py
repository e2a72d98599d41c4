"""Celery task retry helpers."""

from __future__ import annotations

from kombu.exceptions import OperationalError as KombuOperationalError


class RetryableTaskError(RuntimeError):
    """Explicitly retryable task error."""


DEFAULT_RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    RetryableTaskError,
    KombuOperationalError,
    ConnectionError,
    TimeoutError,
)
