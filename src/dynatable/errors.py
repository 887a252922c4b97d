from __future__ import annotations


class TableBuilderError(Exception):
    """テーブル定義の検証エラーの基底クラス。"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HashRequiredError(TableBuilderError):
    """hash キーが必要なインデックスで hash キーが定義されていない。"""

    def __init__(self, message: str = "A hash key is required."):
        super().__init__(message)


class RangeRequiredError(TableBuilderError):
    """LSI の range キーが定義されていない。"""

    def __init__(self, message: str = "A range key is required for a local secondary index."):
        super().__init__(message)


class IncompleteKeyError(TableBuilderError):
    """キー属性の名前か型が欠けている。``field`` は "name" か "type"。"""

    def __init__(self, field: str):
        super().__init__(f"Key element is missing its {field}.")
        self.field = field


class NoProjectionSpecifiedError(TableBuilderError):
    """セカンダリインデックスの射影が指定されていない。"""

    def __init__(self, message: str = "A projection is required for a secondary index."):
        super().__init__(message)


class MissingProvisionedThroughputError(TableBuilderError):
    """読み込み・書き込みキャパシティの片方または両方が未設定。"""

    def __init__(self, missing_read: bool, missing_write: bool):
        parts: list[str] = []
        if missing_read:
            parts.append("Missing read capacity.")
        if missing_write:
            parts.append("Missing write capacity.")
        super().__init__(" ".join(parts))
        self.missing_read = missing_read
        self.missing_write = missing_write


class IndexNameRequiredError(TableBuilderError):
    """セカンダリインデックスに名前が付いていない。"""

    def __init__(self, message: str = "A secondary index name is required."):
        super().__init__(message)


class TableNameRequiredError(TableBuilderError):
    def __init__(self, message: str = "A table name is required."):
        super().__init__(message)
