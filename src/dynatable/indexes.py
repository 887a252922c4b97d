from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .domain import (
    AttributeDefinition,
    GlobalSecondaryIndex,
    KeySchemaElement,
    LocalSecondaryIndex,
    ProvisionedThroughput,
)
from .elements import CapacitySpec, KeyElementBuilder, KeySchemaSpec, ProjectionBuilder
from .errors import IndexNameRequiredError

if TYPE_CHECKING:
    from .builder import TableBuilder

_B = TypeVar("_B", bound="_ProvisionedIndexBuilder")


class _ProvisionedIndexBuilder:
    """hash / range キーとキャパシティを持つインデックス(プライマリ・GSI)の共通部分。"""

    def __init__(self, table: TableBuilder):
        self._table = table
        self._keys: KeySchemaSpec = KeySchemaSpec(self, hash_required=True)
        self._capacity = CapacitySpec()

    def hash(self) -> KeyElementBuilder:
        return self._keys.hash()

    def range(self) -> KeyElementBuilder:
        return self._keys.range()

    def read_capacity(self: _B, units: int) -> _B:
        self._capacity.set_read(units)
        return self

    def write_capacity(self: _B, units: int) -> _B:
        self._capacity.set_write(units)
        return self

    def and_(self) -> TableBuilder:
        return self._table


class PrimaryKeyBuilder(_ProvisionedIndexBuilder):
    """テーブル本体のキー。hash は必須、range は任意。"""

    def build(
        self,
        key_schema: list[KeySchemaElement],
        attribute_definitions: list[AttributeDefinition],
    ) -> ProvisionedThroughput:
        self._keys.build(key_schema, attribute_definitions)
        return self._capacity.build()


class GlobalSecondaryIndexBuilder(_ProvisionedIndexBuilder):
    def __init__(self, table: TableBuilder):
        super().__init__(table)
        self.index_name: str | None = None
        self._projection: ProjectionBuilder[GlobalSecondaryIndexBuilder] | None = None

    def name(self, index_name: str) -> GlobalSecondaryIndexBuilder:
        self.index_name = index_name
        return self

    def projection(self) -> ProjectionBuilder[GlobalSecondaryIndexBuilder]:
        if self._projection is None:
            self._projection = ProjectionBuilder(self)
        return self._projection

    def build(self, attribute_definitions: list[AttributeDefinition]) -> GlobalSecondaryIndex:
        key_schema: list[KeySchemaElement] = []
        self._keys.build(key_schema, attribute_definitions)
        projection = self.projection().build()
        throughput = self._capacity.build()
        if self.index_name is None:
            raise IndexNameRequiredError()
        return GlobalSecondaryIndex(
            index_name=self.index_name,
            key_schema=tuple(key_schema),
            projection=projection,
            provisioned_throughput=throughput,
        )


class LocalSecondaryIndexBuilder:
    """テーブルの hash キーを共有し、独自の range キーだけを持つインデックス。

    キャパシティはテーブル側のものを使うので持たない。
    """

    def __init__(self, table: TableBuilder):
        self._table = table
        self.index_name: str | None = None
        self._keys: KeySchemaSpec = KeySchemaSpec(self, hash_required=False, range_required=True)
        self._projection: ProjectionBuilder[LocalSecondaryIndexBuilder] | None = None

    def name(self, index_name: str) -> LocalSecondaryIndexBuilder:
        self.index_name = index_name
        return self

    def range(self) -> KeyElementBuilder[LocalSecondaryIndexBuilder]:
        return self._keys.range()

    def projection(self) -> ProjectionBuilder[LocalSecondaryIndexBuilder]:
        if self._projection is None:
            self._projection = ProjectionBuilder(self)
        return self._projection

    def and_(self) -> TableBuilder:
        return self._table

    def build(
        self,
        primary_hash: KeySchemaElement,
        attribute_definitions: list[AttributeDefinition],
    ) -> LocalSecondaryIndex:
        key_schema: list[KeySchemaElement] = [primary_hash]
        self._keys.build(key_schema, attribute_definitions)
        projection = self.projection().build()
        if self.index_name is None:
            raise IndexNameRequiredError()
        return LocalSecondaryIndex(
            index_name=self.index_name,
            key_schema=tuple(key_schema),
            projection=projection,
        )
