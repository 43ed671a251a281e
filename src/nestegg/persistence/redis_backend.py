"""Redis backend implementing IPolicyStore.

Each policy is one JSON document under ``{key_prefix}{user_id}``.
"""

from __future__ import annotations

import redis

from nestegg.core.exceptions import NotFoundError, StoreError
from nestegg.core.types import Clock
from nestegg.models.policy import ContributionPolicy, PolicyUpdate, apply_update, utcnow


class RedisPolicyStore:
    """Production IPolicyStore backed by Redis."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 key_prefix: str = "policy:", clock: Clock = utcnow) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._key_prefix = key_prefix
        self._clock = clock
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def _key(self, user_id: str) -> str:
        return f"{self._key_prefix}{user_id}"

    def _load(self, user_id: str) -> ContributionPolicy | None:
        key = self._key(user_id)
        try:
            raw = self._client.get(key)
        except Exception as exc:
            raise StoreError(f"Redis GET failed for key={key!r}: {exc}") from exc
        if raw is None:
            return None
        return ContributionPolicy.model_validate_json(raw)

    def _save(self, policy: ContributionPolicy) -> None:
        key = self._key(policy.user_id)
        try:
            self._client.set(key, policy.model_dump_json(by_alias=True))
        except Exception as exc:
            raise StoreError(f"Redis SET failed for key={key!r}: {exc}") from exc

    def get(self, user_id: str) -> ContributionPolicy:
        policy = self._load(user_id)
        if policy is None:
            raise NotFoundError(user_id)
        return policy

    def upsert(self, user_id: str, update: PolicyUpdate) -> ContributionPolicy:
        policy = apply_update(self._load(user_id), user_id, update, self._clock())
        self._save(policy)
        return policy

    def put(self, policy: ContributionPolicy) -> None:
        self._save(policy)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except Exception as exc:
            raise StoreError(f"Redis PING failed for {self._host}:{self._port}: {exc}") from exc
