from bucketorm.core.model import BucketModel
from bucketorm.core.schema_model import BucketSchemaModel
from bucketorm.core.client import BucketORM, create_storage

__all__ = ["BucketModel", "BucketSchemaModel", "BucketORM", "create_storage"]
