"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class StoreConfig(BaseSettings):
    """Policy store selection."""

    model_config = {"env_prefix": "NESTEGG_STORE_"}

    backend: Literal["memory", "redis", "dynamodb"] = "memory"
    seed_demo_user: bool = True


class RedisConfig(BaseSettings):
    """Redis policy store configuration."""

    model_config = {"env_prefix": "NESTEGG_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "policy:"


class DynamoDBConfig(BaseSettings):
    """DynamoDB policy store configuration."""

    model_config = {"env_prefix": "NESTEGG_DYNAMO_"}

    table_name: str = "nestegg-contributions"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ProjectionConfig(BaseSettings):
    """Assumptions used by the projection calculator."""

    model_config = {"env_prefix": "NESTEGG_PROJECTION_"}

    default_annual_return: float = 0.07
    irs_annual_limit: float = 23000.0  # 2024 elective deferral limit, display only
    series_compounding: Literal["annual", "monthly"] = "annual"


class ApiConfig(BaseSettings):
    """HTTP server configuration."""

    model_config = {"env_prefix": "NESTEGG_API_"}

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "NESTEGG_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    default_user_id: str = "user123"

    store: StoreConfig = StoreConfig()
    redis: RedisConfig = RedisConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    projection: ProjectionConfig = ProjectionConfig()
    api: ApiConfig = ApiConfig()
