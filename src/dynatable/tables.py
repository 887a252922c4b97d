from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from botocore.exceptions import ClientError

from .builder import TableBuilder

logger = logging.getLogger(__name__)

TableDefiner = Callable[[TableBuilder], object]
ExistsCheck = Callable[[Any, str], bool]

# 存在を確認済みのテーブル名(プロセス全体で共有)
_confirmed_tables: set[str] = set()
_lock = threading.Lock()


def table_exists(client: Any, table_name: str) -> bool:
    try:
        client.describe_table(TableName=table_name)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
            return False
        raise
    return True


def create_table_if_necessary(
    client: Any,
    table_name: str,
    define: TableDefiner,
    exists: ExistsCheck = table_exists,
) -> Any:
    """テーブルが無ければ ``define`` で定義して作成する。

    一度存在を確認したテーブル名は記憶し、以降は問い合わせずに戻る。
    作成した場合は ``create_table`` の戻り値を、それ以外は None を返す。
    """

    if _is_confirmed(table_name):
        logger.debug("Table %s already confirmed, skipping", table_name)
        return None

    if exists(client, table_name):
        logger.info("Table already exists: %s", table_name)
        _confirm(table_name)
        return None

    builder = TableBuilder().name(table_name)
    define(builder)
    try:
        result = builder.create(client)
    except ClientError as e:
        # 並行して別の呼び出しが先に作成した場合
        if e.response.get("Error", {}).get("Code") == "ResourceInUseException":
            logger.info("Table already exists: %s", table_name)
            _confirm(table_name)
            return None
        raise
    _confirm(table_name)
    logger.info("Created table: %s", table_name)
    return result


def forget_table(table_name: str) -> None:
    with _lock:
        _confirmed_tables.discard(table_name)


def forget_all_tables() -> None:
    with _lock:
        _confirmed_tables.clear()


def _is_confirmed(table_name: str) -> bool:
    with _lock:
        return table_name in _confirmed_tables


def _confirm(table_name: str) -> None:
    with _lock:
        _confirmed_tables.add(table_name)
