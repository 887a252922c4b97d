from __future__ import annotations

import os
from pathlib import Path

from dynatable.builder import TableBuilder
from dynatable.config import Settings, build_client, load_dotenv_file, setup_logging
from dynatable.domain import ScalarAttributeType
from dynatable.tables import create_table_if_necessary


def _required_env(name: str) -> str:
    v = os.environ.get(name, "").strip()
    if not v:
        raise SystemExit(f"{name} is required")
    return v


def _int_env(name: str, default: int) -> int:
    v = os.environ.get(name, "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        raise SystemExit(f"{name} must be an integer: {v}")


def main() -> None:
    load_dotenv_file(Path(__file__).resolve().parents[1] / "config" / ".env")
    settings = Settings.from_env()
    setup_logging(settings)

    table_name = _required_env("DDB_TABLE_NAME")
    read_capacity = _int_env("DDB_READ_CAPACITY", 1)
    write_capacity = _int_env("DDB_WRITE_CAPACITY", 1)

    def define(builder: TableBuilder) -> None:
        (
            builder.primary()
            .hash().name("pk").type(ScalarAttributeType.STRING)
            .range().name("sk").type(ScalarAttributeType.STRING)
            .read_capacity(read_capacity)
            .write_capacity(write_capacity)
        )

    ddb = build_client(settings)
    result = create_table_if_necessary(ddb, table_name, define)
    if result is None:
        print(f"Table already exists: {table_name}")
        return

    ddb.get_waiter("table_exists").wait(TableName=table_name)
    print(f"Created table: {table_name}")


if __name__ == "__main__":
    main()
