"""
ErrorHandler: maps raw S3 / botocore exceptions to catalog entries.

Usage:
    from bucketorm.errors.handler import ErrorHandler

    errors = ErrorHandler()

    try:
        client.put_object(...)
    except ClientError as e:
        friendly = errors.handle(e, context="s3:upload")
        raise StorageError(friendly.message, cause=e) from e
"""

import logging
from dataclasses import replace
from typing import Optional

from bucketorm.errors.catalog import ERROR_PATTERNS, GENERIC_ERROR
from bucketorm.errors.models import ErrorSeverity, FriendlyError

logger = logging.getLogger("bucketorm.errors")

LOG_LEVELS = {
    ErrorSeverity.CRITICAL: logging.ERROR,
    ErrorSeverity.CONFIG: logging.WARNING,
    ErrorSeverity.INFO: logging.INFO,
}


class ErrorHandler:
    """Matches backend errors against the catalog, first match wins."""

    def handle(self, error: Exception, context: str = "") -> FriendlyError:
        """Match an exception by its type name and message.

        Args:
            error: The caught exception.
            context: Operation label for the log line (e.g. "s3:upload").
        """
        return self.handle_string(f"{type(error).__name__}: {error}", context)

    def handle_string(self, error_message: str, context: str = "") -> FriendlyError:
        template = self.match(error_message)
        friendly = replace(template or GENERIC_ERROR, original_error=error_message)

        tag = friendly.error_code if template is not None else "UNMATCHED"
        prefix = f"[{context}] " if context else ""
        logger.log(LOG_LEVELS[friendly.severity], f"{prefix}{tag}: {error_message}")
        return friendly

    @staticmethod
    def match(error_message: str) -> Optional[FriendlyError]:
        """Return the catalog template for `error_message`, or None."""
        for pattern, template in ERROR_PATTERNS:
            if pattern.search(error_message):
                return template
        return None
