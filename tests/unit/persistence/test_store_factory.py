"""Tests for create_policy_store backend selection and demo seeding."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
from moto import mock_aws

from nestegg.core.config import AppSettings, DynamoDBConfig, StoreConfig
from nestegg.persistence import (
    DynamoDBPolicyStore,
    MemoryPolicyStore,
    RedisPolicyStore,
    create_policy_store,
    seed_demo_user,
)


def _settings(backend: str, seed: bool = False) -> AppSettings:
    return AppSettings(store=StoreConfig(backend=backend, seed_demo_user=seed))


def test_memory_backend_seeds_demo_user():
    store = create_policy_store(_settings("memory", seed=True))
    assert isinstance(store, MemoryPolicyStore)
    assert store.get("user123").contribution_value == 6


def test_memory_backend_without_seed_is_empty():
    store = create_policy_store(_settings("memory"))
    assert len(store) == 0


def test_redis_backend():
    client = fakeredis.FakeRedis(decode_responses=True)
    with patch("redis.Redis", return_value=client):
        store = create_policy_store(_settings("redis", seed=True))
    assert isinstance(store, RedisPolicyStore)
    assert client.exists("policy:user123")


def test_dynamodb_backend(aws_credentials):
    with mock_aws():
        settings = AppSettings(
            store=StoreConfig(backend="dynamodb", seed_demo_user=False),
            dynamodb=DynamoDBConfig(table_name="policies"),
        )
        store = create_policy_store(settings)
    assert isinstance(store, DynamoDBPolicyStore)


def test_seed_does_not_replace_existing_record():
    store = MemoryPolicyStore()
    assert seed_demo_user(store, "user123") is True
    store.put(store.get("user123").model_copy(update={"contribution_value": 9.0}))
    assert seed_demo_user(store, "user123") is False
    assert store.get("user123").contribution_value == 9.0
