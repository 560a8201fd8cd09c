"""
Error pattern catalog.

Maps regex patterns from known S3 / botocore errors to friendly, actionable
messages. When a new backend error shows up in the logs:
  1. Capture the raw error text
  2. Add a regex pattern here
  3. Write a message that says what broke and who can fix it
  4. Add a unit test
"""

import re
from bucketorm.errors.models import FriendlyError, ErrorSeverity

# Each entry: (compiled_regex, FriendlyError template)
# Order matters: first match wins.

ERROR_PATTERNS: list[tuple[re.Pattern, FriendlyError]] = [
    # ── Bucket / addressing ───────────────────────────────────────────────

    (
        re.compile(r"NoSuchBucket", re.IGNORECASE),
        FriendlyError(
            message=(
                "The configured bucket does not exist. Create it first or fix "
                "BUCKET_NAME. For MinIO, the docker-compose init container creates "
                "the default buckets."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_NO_SUCH_BUCKET",
            action="Create the bucket or correct BUCKET_NAME",
        ),
    ),
    (
        re.compile(r"PermanentRedirect|AuthorizationHeaderMalformed.*region", re.IGNORECASE),
        FriendlyError(
            message=(
                "The bucket lives in a different region than the one configured. "
                "Set AWS_REGION to the bucket's region."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_WRONG_REGION",
            action="Set AWS_REGION to the bucket's region",
        ),
    ),

    # ── Credentials ───────────────────────────────────────────────────────

    (
        re.compile(r"InvalidAccessKeyId", re.IGNORECASE),
        FriendlyError(
            message=(
                "The access key is not recognised by the storage endpoint. Check "
                "AWS_ACCESS_KEY_ID, and S3_ENDPOINT if you are using MinIO or another "
                "S3-compatible service."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_INVALID_ACCESS_KEY",
            action="Check AWS_ACCESS_KEY_ID",
        ),
    ),
    (
        re.compile(r"SignatureDoesNotMatch", re.IGNORECASE),
        FriendlyError(
            message=(
                "The request signature was rejected. The secret key is probably "
                "wrong, or path-style addressing is required (S3_FORCE_PATH_STYLE=true)."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_SIGNATURE_MISMATCH",
            action="Check AWS_SECRET_ACCESS_KEY and S3_FORCE_PATH_STYLE",
        ),
    ),
    (
        re.compile(r"NoCredentialsError|Unable to locate credentials", re.IGNORECASE),
        FriendlyError(
            message=(
                "No credentials were found for the storage endpoint. Set "
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY, or run with an IAM role."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_NO_CREDENTIALS",
            action="Provide credentials",
        ),
    ),
    (
        re.compile(r"AccessDenied|Forbidden|\b403\b", re.IGNORECASE),
        FriendlyError(
            message=(
                "Access to the bucket was denied. The credentials in use need "
                "s3:GetObject, s3:PutObject, s3:DeleteObject and s3:ListBucket."
            ),
            severity=ErrorSeverity.CRITICAL,
            error_code="S3_ACCESS_DENIED",
            action="Grant bucket permissions to the credentials in use",
        ),
    ),

    # ── Network ───────────────────────────────────────────────────────────

    (
        re.compile(r"Could not connect to the endpoint URL|EndpointConnectionError", re.IGNORECASE),
        FriendlyError(
            message=(
                "The storage endpoint is unreachable. If you are running MinIO "
                "locally, make sure the container is up and S3_ENDPOINT points at it."
            ),
            severity=ErrorSeverity.CONFIG,
            error_code="S3_ENDPOINT_UNREACHABLE",
            action="Start the storage service or fix S3_ENDPOINT",
        ),
    ),
    (
        re.compile(r"ReadTimeoutError|ConnectTimeoutError|timed out", re.IGNORECASE),
        FriendlyError(
            message=(
                "The storage endpoint took too long to respond. Try again, or raise "
                "S3_TIMEOUT_SECONDS for slow links."
            ),
            severity=ErrorSeverity.INFO,
            error_code="S3_TIMEOUT",
            action="Retry or raise S3_TIMEOUT_SECONDS",
            retryable=True,
        ),
    ),
    (
        re.compile(r"SlowDown|Throttl|RequestLimitExceeded|\b503\b", re.IGNORECASE),
        FriendlyError(
            message=(
                "The storage endpoint is throttling requests. Try again in a moment."
            ),
            severity=ErrorSeverity.INFO,
            error_code="S3_THROTTLED",
            action="Retry in a moment",
            retryable=True,
        ),
    ),
]


# Pre-built generic fallback
GENERIC_ERROR = FriendlyError(
    message=(
        "The storage backend reported an unexpected error. The raw error has "
        "been logged."
    ),
    severity=ErrorSeverity.INFO,
    error_code="S3_UNKNOWN",
    action="Check the logs for the raw backend error",
)
