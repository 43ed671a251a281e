"""Pluggable policy store backends behind the IPolicyStore Protocol."""

from __future__ import annotations

from loguru import logger

from nestegg.core.config import AppSettings
from nestegg.core.exceptions import NotFoundError
from nestegg.core.protocols import IPolicyStore
from nestegg.models.policy import (
    DEFAULT_POLICY,
    ContributionPolicy,
    ContributionType,
    utcnow,
)
from nestegg.persistence.dynamodb_backend import DynamoDBPolicyStore
from nestegg.persistence.memory_backend import MemoryPolicyStore
from nestegg.persistence.redis_backend import RedisPolicyStore

__all__ = [
    "DynamoDBPolicyStore",
    "IPolicyStore",
    "MemoryPolicyStore",
    "RedisPolicyStore",
    "create_policy_store",
    "demo_policy",
    "seed_demo_user",
]


def demo_policy(user_id: str) -> ContributionPolicy:
    """Sample record: 6% of a 75k salary, five months into the year."""
    return ContributionPolicy.model_validate(
        {
            **DEFAULT_POLICY.model_dump(),
            "user_id": user_id,
            "contribution_type": ContributionType.PERCENTAGE,
            "contribution_value": 6.0,
            "year_to_date_contributions": 3750.0,
            "last_updated": utcnow(),
        }
    )


def seed_demo_user(store: IPolicyStore, user_id: str) -> bool:
    """Store the demo record unless ``user_id`` already has one."""
    try:
        store.get(user_id)
    except NotFoundError:
        store.put(demo_policy(user_id))
        logger.info(f"Seeded demo contribution policy for {user_id!r}")
        return True
    return False


def create_policy_store(settings: AppSettings | None = None) -> IPolicyStore:
    """Create the policy store selected by ``settings.store.backend``."""
    if settings is None:
        settings = AppSettings()

    backend = settings.store.backend
    store: IPolicyStore
    if backend == "redis":
        store = RedisPolicyStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )
    elif backend == "dynamodb":
        store = DynamoDBPolicyStore(
            table_name=settings.dynamodb.table_name,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )
    else:
        store = MemoryPolicyStore()
    logger.info(f"Using {backend} policy store")

    if settings.store.seed_demo_user:
        seed_demo_user(store, settings.default_user_id)
    return store
