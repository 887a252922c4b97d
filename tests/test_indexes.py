from __future__ import annotations

import pytest

from dynatable.builder import TableBuilder
from dynatable.domain import KeySchemaElement, KeyType, ProjectionType, ScalarAttributeType
from dynatable.errors import (
    HashRequiredError,
    IncompleteKeyError,
    IndexNameRequiredError,
    MissingProvisionedThroughputError,
    NoProjectionSpecifiedError,
    RangeRequiredError,
)


def test_primary_with_hash_and_capacity_yields_one_hash_element():
    table = TableBuilder()
    primary = table.primary()
    primary.hash().name("orderId").type(ScalarAttributeType.STRING)
    primary.read_capacity(5).write_capacity(5)

    key_schema, definitions = [], []
    throughput = primary.build(key_schema, definitions)

    assert [k.key_type for k in key_schema] == [KeyType.HASH]
    assert throughput.read_capacity_units == 5
    assert throughput.write_capacity_units == 5


def test_primary_key_schema_is_hash_then_range():
    """プライマリキーは常に [hash, range] の順。"""

    primary = TableBuilder().primary()
    (
        primary.range().name("createdAt").type(ScalarAttributeType.NUMBER)
        .hash().name("orderId").type(ScalarAttributeType.STRING)
        .read_capacity(1)
        .write_capacity(1)
    )

    key_schema, definitions = [], []
    primary.build(key_schema, definitions)

    assert [(k.attribute_name, k.key_type) for k in key_schema] == [
        ("orderId", KeyType.HASH),
        ("createdAt", KeyType.RANGE),
    ]


def test_primary_without_hash_raises():
    primary = TableBuilder().primary().read_capacity(1).write_capacity(1)
    with pytest.raises(HashRequiredError):
        primary.build([], [])


def test_primary_hash_error_comes_before_capacity_error():
    with pytest.raises(HashRequiredError):
        TableBuilder().primary().build([], [])


def test_primary_hash_accessor_is_memoized():
    """hash() を2回呼ぶと同じインスタンスで、片方の変更がもう片方に見える。"""

    primary = TableBuilder().primary()
    first = primary.hash()
    second = primary.hash()

    assert first is second
    first.name("orderId")
    assert second.attribute_name == "orderId"


def test_index_and_returns_table():
    table = TableBuilder()
    assert table.primary().and_() is table
    assert table.global_index().and_() is table
    assert table.local_index().and_() is table


def _global_with_keys(table: TableBuilder):
    index = table.global_index().name("byStatus")
    index.hash().name("status").type(ScalarAttributeType.STRING)
    return index


def test_global_index_builds_descriptor():
    index = _global_with_keys(TableBuilder())
    index.range().name("createdAt").type(ScalarAttributeType.NUMBER)
    index.projection().include_attributes("total")
    index.read_capacity(2).write_capacity(3)

    definitions = []
    built = index.build(definitions)

    assert built.index_name == "byStatus"
    assert [k.attribute_name for k in built.key_schema] == ["status", "createdAt"]
    assert built.projection.projection_type is ProjectionType.INCLUDE
    assert built.projection.non_key_attributes == ("total",)
    assert built.provisioned_throughput.read_capacity_units == 2
    assert built.provisioned_throughput.write_capacity_units == 3
    assert [d.attribute_name for d in definitions] == ["status", "createdAt"]


def test_global_index_projection_is_memoized_and_returns_index():
    index = TableBuilder().global_index()
    assert index.projection() is index.projection()
    assert index.projection().all() is index


def test_global_index_requires_hash():
    index = TableBuilder().global_index().name("g")
    index.projection().all()
    index.read_capacity(1).write_capacity(1)

    with pytest.raises(HashRequiredError):
        index.build([])


def test_global_index_requires_projection():
    """GSI は射影の指定が必須。"""

    index = _global_with_keys(TableBuilder())
    index.read_capacity(1).write_capacity(1)

    with pytest.raises(NoProjectionSpecifiedError):
        index.build([])


def test_global_index_requires_capacity():
    index = _global_with_keys(TableBuilder())
    index.projection().all()
    index.read_capacity(1)

    with pytest.raises(MissingProvisionedThroughputError) as exc:
        index.build([])
    assert exc.value.missing_write and not exc.value.missing_read


def test_global_index_checks_projection_before_capacity():
    index = _global_with_keys(TableBuilder())

    with pytest.raises(NoProjectionSpecifiedError):
        index.build([])


def test_global_index_incomplete_key_is_reported():
    index = TableBuilder().global_index().name("g")
    index.hash().name("status")
    index.projection().all()
    index.read_capacity(1).write_capacity(1)

    with pytest.raises(IncompleteKeyError) as exc:
        index.build([])
    assert exc.value.field == "type"


def test_local_index_prepends_table_hash():
    """LSI のキースキーマはテーブルの hash キーの後に自身の range キーが続く。"""

    primary_hash = KeySchemaElement(attribute_name="orderId", key_type=KeyType.HASH)
    index = TableBuilder().local_index().name("byTotal")
    index.range().name("total").type(ScalarAttributeType.NUMBER)
    index.projection().keys_only()

    definitions = []
    built = index.build(primary_hash, definitions)

    assert built.index_name == "byTotal"
    assert built.key_schema == (
        primary_hash,
        KeySchemaElement(attribute_name="total", key_type=KeyType.RANGE),
    )
    assert built.projection.projection_type is ProjectionType.KEYS_ONLY
    # テーブルの hash キーの属性定義はLSI側では追加しない
    assert [d.attribute_name for d in definitions] == ["total"]


def test_local_index_requires_range():
    primary_hash = KeySchemaElement(attribute_name="orderId", key_type=KeyType.HASH)
    index = TableBuilder().local_index().name("byTotal")
    index.projection().all()

    with pytest.raises(RangeRequiredError):
        index.build(primary_hash, [])


def test_local_index_requires_projection():
    primary_hash = KeySchemaElement(attribute_name="orderId", key_type=KeyType.HASH)
    index = TableBuilder().local_index().name("byTotal")
    index.range().name("total").type(ScalarAttributeType.NUMBER)

    with pytest.raises(NoProjectionSpecifiedError):
        index.build(primary_hash, [])


def test_local_index_has_no_hash_or_capacity():
    index = TableBuilder().local_index()
    assert not hasattr(index, "hash")
    assert not hasattr(index, "read_capacity")
    assert not hasattr(index, "write_capacity")


def test_capacity_setters_return_the_same_index():
    table = TableBuilder()
    primary = table.primary()
    index = table.global_index()

    assert primary.read_capacity(1) is primary
    assert primary.write_capacity(1) is primary
    assert index.read_capacity(1).name("g") is index


def test_unnamed_global_index_raises():
    """GSI に名前が無ければ、他の検証がすべて通った後でエラーにする。"""

    index = TableBuilder().global_index()
    index.hash().name("status").type(ScalarAttributeType.STRING)
    index.projection().all()
    index.read_capacity(1).write_capacity(1)

    with pytest.raises(IndexNameRequiredError):
        index.build([])


def test_unnamed_global_index_reports_capacity_first():
    index = TableBuilder().global_index()
    index.hash().name("status").type(ScalarAttributeType.STRING)
    index.projection().all()

    with pytest.raises(MissingProvisionedThroughputError):
        index.build([])


def test_unnamed_local_index_raises():
    primary_hash = KeySchemaElement(attribute_name="orderId", key_type=KeyType.HASH)
    index = TableBuilder().local_index()
    index.range().name("total").type(ScalarAttributeType.NUMBER)
    index.projection().all()

    with pytest.raises(IndexNameRequiredError):
        index.build(primary_hash, [])


def test_unnamed_local_index_reports_range_first():
    primary_hash = KeySchemaElement(attribute_name="orderId", key_type=KeyType.HASH)
    index = TableBuilder().local_index()
    index.projection().all()

    with pytest.raises(RangeRequiredError):
        index.build(primary_hash, [])
