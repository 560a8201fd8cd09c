"""
Store configuration.

Loaded from environment variables, optionally seeded from a .env file:
    BUCKET_NAME             bucket holding every model (default: bucketorm-dev)
    AWS_REGION              region (default: us-east-1)
    AWS_ACCESS_KEY_ID       credential pair; omit both to use the default chain
    AWS_SECRET_ACCESS_KEY
    S3_ENDPOINT             custom endpoint for MinIO, R2, Spaces, ...
    S3_FORCE_PATH_STYLE     "true" for path-style addressing (MinIO)
    S3_TIMEOUT_SECONDS      connect/read timeout for each request
    BUCKETORM_BACKEND       s3 | file | memory (default: s3)
    BUCKETORM_DATA_DIR      root directory for the file backend
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

BACKENDS = ("s3", "file", "memory")


@dataclass
class StoreConfig:
    """Everything needed to construct a storage adapter."""

    bucket: str = "bucketorm-dev"
    region: str = "us-east-1"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint: Optional[str] = None
    force_path_style: bool = False
    request_timeout_s: float = 30.0
    backend: str = "s3"
    data_dir: str = "data/bucketorm"

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "StoreConfig":
        """Build a config from the environment. Existing variables win over .env."""
        _load_env_file(env_file)
        return cls(
            bucket=os.getenv("BUCKET_NAME", "bucketorm-dev"),
            region=os.getenv("AWS_REGION", "us-east-1"),
            access_key_id=os.getenv("AWS_ACCESS_KEY_ID") or None,
            secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY") or None,
            endpoint=os.getenv("S3_ENDPOINT") or None,
            force_path_style=os.getenv("S3_FORCE_PATH_STYLE", "").lower() == "true",
            request_timeout_s=float(os.getenv("S3_TIMEOUT_SECONDS", "30")),
            backend=os.getenv("BUCKETORM_BACKEND", "s3").lower(),
            data_dir=os.getenv("BUCKETORM_DATA_DIR", "data/bucketorm"),
        )

    def has_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


def _load_env_file(env_file: str) -> None:
    """Load .env file into os.environ."""
    path = Path(env_file)
    if not path.exists():
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                os.environ.setdefault(key.strip(), value.strip())
