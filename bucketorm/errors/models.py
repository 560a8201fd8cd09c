"""
Friendly error models.

A FriendlyError is what a raw S3 / botocore failure turns into before it is
attached to a StorageError: what broke, how serious it is, and the fix.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """How serious a backend failure is."""

    INFO = "info"          # Transient: throttling, timeouts
    CONFIG = "config"      # Credentials, bucket, region or endpoint
    CRITICAL = "critical"  # Permissions


@dataclass
class FriendlyError:
    """Catalog entry describing one class of storage backend failure."""

    message: str
    severity: ErrorSeverity
    error_code: str = ""       # e.g. S3_NO_SUCH_BUCKET
    action: str = ""
    retryable: bool = False    # Same request may succeed later
    original_error: str = ""   # Raw backend error text, filled in on match

    def to_dict(self) -> dict:
        """Shape stored in StorageError.details."""
        return {
            "error_code": self.error_code,
            "severity": self.severity.value,
            "message": self.message,
            "action": self.action,
            "retryable": self.retryable,
        }
