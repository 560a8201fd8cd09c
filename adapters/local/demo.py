"""
BucketORM walk-through

Runs the full CRUD cycle and the schema gate against whatever backend the
environment selects. Start MinIO with `docker compose up -d` for the S3
path, or set BUCKETORM_BACKEND=file to use a local directory.

Usage:
    python -m adapters.local.demo
    BUCKETORM_BACKEND=memory python -m adapters.local.demo
"""

import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, EmailStr, Field

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bucketorm import BucketORM, BucketORMError, InvalidData

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("bucketorm.demo")

MODEL_NAME = "demo_user"


class UserSchema(BaseModel):
    id: str
    name: str = Field(min_length=1)
    email: EmailStr
    age: int = Field(ge=13, le=120)
    role: str = "user"
    active: bool = True


SEED_USERS = [
    {"id": "user1", "name": "Alice Johnson", "email": "alice@example.com", "age": 28, "role": "admin", "active": True},
    {"id": "user2", "name": "Bob Smith", "email": "bob@example.com", "age": 32, "role": "user", "active": True},
    {"id": "user3", "name": "Charlie Brown", "email": "charlie@example.com", "age": 25, "role": "guest", "active": False},
]


async def run_crud(orm: BucketORM) -> None:
    users = orm.model(MODEL_NAME)

    logger.info("Creating users...")
    for data in SEED_USERS:
        record = await users.create(data)
        logger.info(f"  {record['id']}: {record['name']} (created {record['createdAt']})")

    alice = await users.find_one("user1")
    logger.info(f"find_one('user1') -> {alice['name'] if alice else None}")

    active = await users.find_many(where={"active": True})
    logger.info(f"Active users: {[u['id'] for u in active]}")

    page = await users.find_many(offset=1, limit=1)
    logger.info(f"Second page of one: {[u['id'] for u in page]}")

    updated = await users.update("user2", {"age": 33, "role": "admin"})
    logger.info(f"Updated user2: age={updated['age']} role={updated['role']}")

    for data in SEED_USERS:
        await users.delete(data["id"])
    logger.info(f"Deleted all, remaining: {len(await users.find_many())}")


async def run_schema(orm: BucketORM) -> None:
    users = orm.schema_model(MODEL_NAME, UserSchema)

    record = await users.create_with_validation(
        {"id": "valid1", "name": "Dana", "email": "dana@example.com", "age": 41}
    )
    logger.info(f"Validated create: {record['id']} role={record['role']} active={record['active']}")

    try:
        await users.create_with_validation(
            {"id": "invalid1", "name": "", "email": "not-an-email", "age": 7}
        )
    except InvalidData as e:
        logger.info(f"Rejected as expected: {e.message}")
        for error in e.errors:
            logger.info(f"  {error}")

    try:
        await users.update_with_validation("valid1", {"age": 500})
    except InvalidData as e:
        logger.info(f"Rejected update as expected: {e.message}")

    updated = await users.update_with_validation("valid1", {"age": 42})
    logger.info(f"Validated update: age={updated['age']} name={updated['name']}")

    await users.delete("valid1")


async def main() -> int:
    orm = BucketORM.from_env()
    logger.info(f"Backend: {orm.config.backend} (bucket={orm.config.bucket})")

    try:
        await run_crud(orm)
        await run_schema(orm)
    except BucketORMError as e:
        logger.error(f"Demo failed: {e}")
        return 1

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
