from enum import Enum

import polars as pl


class Scope(str, Enum):
    """Property scope (NODE, LINK).

    Attributes:
        NODE: One value per node index
        LINK: One value per link index
    """

    NODE = "node"
    LINK = "link"


class PropertyKind(str, Enum):
    """Typed property columns (DOUBLE, INT, BOOL, TEXT).

    Attributes:
        DOUBLE: 64-bit float column, default 0.0
        INT: 64-bit integer column, default 0
        BOOL: boolean column, default False
        TEXT: UTF-8 string column, default ""
    """

    DOUBLE = "double"
    INT = "int"
    BOOL = "bool"
    TEXT = "text"

    @property
    def dtype(self):
        return _DTYPES[self]

    @property
    def default(self):
        return _DEFAULTS[self]

    def coerce(self, value):
        return _COERCE[self](value)


_DTYPES = {
    PropertyKind.DOUBLE: pl.Float64,
    PropertyKind.INT: pl.Int64,
    PropertyKind.BOOL: pl.Boolean,
    PropertyKind.TEXT: pl.Utf8,
}

_DEFAULTS = {
    PropertyKind.DOUBLE: 0.0,
    PropertyKind.INT: 0,
    PropertyKind.BOOL: False,
    PropertyKind.TEXT: "",
}

_COERCE = {
    PropertyKind.DOUBLE: float,
    PropertyKind.INT: int,
    PropertyKind.BOOL: bool,
    PropertyKind.TEXT: str,
}
