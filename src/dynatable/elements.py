from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from .domain import (
    AttributeDefinition,
    KeySchemaElement,
    KeyType,
    Projection,
    ProjectionType,
    ProvisionedThroughput,
    ScalarAttributeType,
)
from .errors import (
    HashRequiredError,
    IncompleteKeyError,
    MissingProvisionedThroughputError,
    NoProjectionSpecifiedError,
    RangeRequiredError,
)

P = TypeVar("P")


class KeyElementBuilder(Generic[P]):
    """1つのキー属性(名前・型・役割)。``type()`` で親のインデックスに戻る。"""

    def __init__(self, parent: P, key_type: KeyType):
        if parent is None:
            raise ValueError("parent is required")
        self._parent = parent
        self.key_type = KeyType(key_type)
        self.attribute_name: str | None = None
        self.attribute_type: ScalarAttributeType | None = None

    def name(self, attribute_name: str) -> KeyElementBuilder[P]:
        self.attribute_name = attribute_name
        return self

    def type(self, attribute_type: ScalarAttributeType | str) -> P:
        self.attribute_type = ScalarAttributeType(attribute_type)
        return self._parent

    def build(
        self,
        key_schema: list[KeySchemaElement],
        attribute_definitions: list[AttributeDefinition],
    ) -> KeySchemaElement:
        if self.attribute_name is None:
            raise IncompleteKeyError("name")
        if self.attribute_type is None:
            raise IncompleteKeyError("type")

        element = KeySchemaElement(attribute_name=self.attribute_name, key_type=self.key_type)
        key_schema.append(element)
        attribute_definitions.append(
            AttributeDefinition(
                attribute_name=self.attribute_name, attribute_type=self.attribute_type
            )
        )
        return element


class ProjectionBuilder(Generic[P]):
    """セカンダリインデックスに射影する属性。

    複数回指定した場合は最後の指定が有効になる(エラーにはしない)。
    """

    def __init__(self, parent: P):
        self._parent = parent
        self.projection_type: ProjectionType | None = None
        self.non_key_attributes: list[str] = []

    def all(self) -> P:
        self.projection_type = ProjectionType.ALL
        self.non_key_attributes = []
        return self._parent

    def keys_only(self) -> P:
        self.projection_type = ProjectionType.KEYS_ONLY
        self.non_key_attributes = []
        return self._parent

    def include_attributes(self, *names: str | Iterable[str]) -> P:
        """属性名を可変長引数か、1つのリスト等で受け取る。

        名前なしで呼んだ場合は NonKeyAttributes を付けない INCLUDE になる(キー属性のみ射影)。
        """

        if len(names) == 1 and not isinstance(names[0], str):
            names = tuple(names[0])
        self.projection_type = ProjectionType.INCLUDE
        # 順序を保ったまま重複を除く
        self.non_key_attributes = list(dict.fromkeys(names))
        return self._parent

    def build(self) -> Projection:
        if self.projection_type is None:
            raise NoProjectionSpecifiedError()
        return Projection(
            projection_type=self.projection_type,
            non_key_attributes=tuple(self.non_key_attributes) or None,
        )


class CapacitySpec:
    """読み書きのキャパシティ。両方そろっていないと build できない。"""

    def __init__(self) -> None:
        self.read_units: int | None = None
        self.write_units: int | None = None

    def set_read(self, units: int) -> None:
        self.read_units = int(units)

    def set_write(self, units: int) -> None:
        self.write_units = int(units)

    def build(self) -> ProvisionedThroughput:
        if self.read_units is None or self.write_units is None:
            raise MissingProvisionedThroughputError(
                missing_read=self.read_units is None,
                missing_write=self.write_units is None,
            )
        return ProvisionedThroughput(
            read_capacity_units=self.read_units, write_capacity_units=self.write_units
        )


class KeySchemaSpec(Generic[P]):
    """インデックスの hash / range キーを遅延生成して保持する。

    どの役割が必須かはインデックスの種類ごとに引数で決める。
    """

    def __init__(self, owner: P, *, hash_required: bool, range_required: bool = False):
        self._owner = owner
        self._hash_required = hash_required
        self._range_required = range_required
        self._hash: KeyElementBuilder[P] | None = None
        self._range: KeyElementBuilder[P] | None = None

    def hash(self) -> KeyElementBuilder[P]:
        if self._hash is None:
            self._hash = KeyElementBuilder(self._owner, KeyType.HASH)
        return self._hash

    def range(self) -> KeyElementBuilder[P]:
        if self._range is None:
            self._range = KeyElementBuilder(self._owner, KeyType.RANGE)
        return self._range

    def build(
        self,
        key_schema: list[KeySchemaElement],
        attribute_definitions: list[AttributeDefinition],
    ) -> None:
        """hash → range の順でキースキーマと属性定義を追加する。"""

        if self._hash_required and self._hash is None:
            raise HashRequiredError()
        if self._range_required and self._range is None:
            raise RangeRequiredError()

        if self._hash is not None:
            self._hash.build(key_schema, attribute_definitions)
        if self._range is not None:
            self._range.build(key_schema, attribute_definitions)
