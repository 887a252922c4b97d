from __future__ import annotations

import logging
from typing import Any

from .domain import (
    AttributeDefinition,
    GlobalSecondaryIndex,
    KeySchemaElement,
    KeyType,
    LocalSecondaryIndex,
    TableCreationRequest,
)
from .errors import TableNameRequiredError
from .indexes import GlobalSecondaryIndexBuilder, LocalSecondaryIndexBuilder, PrimaryKeyBuilder

logger = logging.getLogger(__name__)


class TableBuilder:
    """DynamoDBテーブル作成リクエストを組み立てるfluentなビルダー。

    各設定は任意の順序で呼べる。検証は ``build()`` / ``create()`` の時点でまとめて行い、
    プライマリ → GSI(登録順) → LSI(登録順) の順で最初に見つかったエラーを送出する。
    """

    def __init__(self) -> None:
        self.table_name: str | None = None
        self._primary = PrimaryKeyBuilder(self)
        self._globals: list[GlobalSecondaryIndexBuilder] = []
        self._locals: list[LocalSecondaryIndexBuilder] = []

    def name(self, table_name: str) -> TableBuilder:
        self.table_name = table_name
        return self

    def primary(self) -> PrimaryKeyBuilder:
        return self._primary

    def global_index(self) -> GlobalSecondaryIndexBuilder:
        """GSIを1つ追加する。呼ぶたびに新しいインデックスが登録される。"""

        index = GlobalSecondaryIndexBuilder(self)
        self._globals.append(index)
        return index

    def local_index(self) -> LocalSecondaryIndexBuilder:
        """LSIを1つ追加する。呼ぶたびに新しいインデックスが登録される。"""

        index = LocalSecondaryIndexBuilder(self)
        self._locals.append(index)
        return index

    def build(self) -> TableCreationRequest:
        key_schema: list[KeySchemaElement] = []
        attribute_definitions: list[AttributeDefinition] = []

        throughput = self._primary.build(key_schema, attribute_definitions)
        primary_hash = _find_hash_element(key_schema)

        global_indexes: list[GlobalSecondaryIndex] = [
            index.build(attribute_definitions) for index in self._globals
        ]
        local_indexes: list[LocalSecondaryIndex] = [
            index.build(primary_hash, attribute_definitions) for index in self._locals
        ]

        if self.table_name is None:
            raise TableNameRequiredError()

        request = TableCreationRequest(
            table_name=self.table_name,
            key_schema=tuple(key_schema),
            attribute_definitions=tuple(attribute_definitions),
            global_secondary_indexes=tuple(global_indexes) or None,
            local_secondary_indexes=tuple(local_indexes) or None,
            provisioned_throughput=throughput,
        )
        logger.debug(
            "Built create request for table %s (%d GSI, %d LSI)",
            self.table_name,
            len(global_indexes),
            len(local_indexes),
        )
        return request

    def create(self, client: Any) -> Any:
        """リクエストを組み立てて ``client.create_table`` に渡す。

        ``client`` は boto3 の client / resource のどちらでもよい。戻り値と例外はそのまま返す。
        """

        request = self.build()
        logger.info("Creating table %s", request.table_name)
        return client.create_table(**request.to_kwargs())


def _find_hash_element(key_schema: list[KeySchemaElement]) -> KeySchemaElement:
    for element in key_schema:
        if element.key_type == KeyType.HASH:
            return element
    raise RuntimeError("The hash key was not found, but should have already been created.")
