from __future__ import annotations

import logging
import logging.config
import os
import sys
from pathlib import Path

import boto3
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_dotenv_file(env_path: Path) -> bool:
    """``config/.env`` などがあれば読み込む。既存の環境変数は上書きしない。"""

    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


class Settings(BaseModel):
    region_name: str | None = None
    endpoint_url: str | None = None
    log_level: str = "INFO"

    @field_validator("region_name", "endpoint_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> str:
        if not isinstance(v, str):
            raise TypeError("log_level must be a string")
        s = v.strip().upper()
        if s not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return s

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            region_name=os.environ.get("AWS_REGION"),
            endpoint_url=os.environ.get("DDB_ENDPOINT_URL"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )


def build_client(settings: Settings | None = None):
    settings = settings or Settings.from_env()
    kwargs: dict[str, str] = {}
    if settings.region_name:
        kwargs["region_name"] = settings.region_name
    if settings.endpoint_url:
        # DynamoDB Local など
        kwargs["endpoint_url"] = settings.endpoint_url
    return boto3.client("dynamodb", **kwargs)


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or Settings.from_env()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": settings.log_level,
                    "formatter": "simple",
                    "stream": sys.stdout,
                },
            },
            "loggers": {
                "dynatable": {
                    "level": settings.log_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
