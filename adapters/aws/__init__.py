from adapters.aws.s3_storage import S3StorageAdapter

__all__ = [
    "S3StorageAdapter",
]
