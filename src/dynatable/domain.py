from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class ScalarAttributeType(str, Enum):
    STRING = "S"
    NUMBER = "N"
    BINARY = "B"


class KeyType(str, Enum):
    HASH = "HASH"
    RANGE = "RANGE"


class ProjectionType(str, Enum):
    ALL = "ALL"
    KEYS_ONLY = "KEYS_ONLY"
    INCLUDE = "INCLUDE"


class _WireModel(BaseModel):
    """DynamoDBのリクエスト形式(PascalCase)で出力できる不変モデル。"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_pascal)


class KeySchemaElement(_WireModel):
    attribute_name: str
    key_type: KeyType


class AttributeDefinition(_WireModel):
    attribute_name: str
    attribute_type: ScalarAttributeType


class Projection(_WireModel):
    projection_type: ProjectionType
    non_key_attributes: tuple[str, ...] | None = None


class ProvisionedThroughput(_WireModel):
    read_capacity_units: int
    write_capacity_units: int


class GlobalSecondaryIndex(_WireModel):
    index_name: str
    key_schema: tuple[KeySchemaElement, ...]
    projection: Projection
    provisioned_throughput: ProvisionedThroughput


class LocalSecondaryIndex(_WireModel):
    index_name: str
    key_schema: tuple[KeySchemaElement, ...]
    projection: Projection


class TableCreationRequest(_WireModel):
    table_name: str
    key_schema: tuple[KeySchemaElement, ...]
    attribute_definitions: tuple[AttributeDefinition, ...]
    global_secondary_indexes: tuple[GlobalSecondaryIndex, ...] | None = None
    local_secondary_indexes: tuple[LocalSecondaryIndex, ...] | None = None
    provisioned_throughput: ProvisionedThroughput

    def to_kwargs(self) -> dict[str, Any]:
        """boto3の ``create_table(**kwargs)`` にそのまま渡せる形に変換する。

        未設定のセカンダリインデックスはキーごと省略される(空リストにはしない)。
        """

        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
