"""
Domain models for idbench.

Describes the three identifier modes, the table each one targets (aligned with
`db/init.sql`), and the single row shape inserted into those tables.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple, Union

from pydantic import BaseModel, Field

from idbench.errors import InvalidModeError


class Mode(str, Enum):
    """Identifier kind; also selects the target table."""

    UUID = "uuid"
    SNOWFLAKE = "snowflake"
    ULID = "ulid"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Union[str, "Mode"]) -> "Mode":
        """
        Resolve a user-supplied mode name.

        Raises
        ------
        InvalidModeError
            If `value` is not one of the known modes.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidModeError(str(value), available=cls.names())


class TableSpec(BaseModel):
    """
    Target table of a mode: its name and the indexed identifier column.
    """

    name: str = Field(..., description="Table name.")
    key_column: str = Field(..., description="Secondary-indexed identifier column.")

    model_config = {"frozen": True}

    @property
    def statement_name(self) -> str:
        return f"insert_{self.name}"


TABLES: Dict[Mode, TableSpec] = {
    Mode.UUID: TableSpec(name="users_uuid", key_column="uuid"),
    Mode.SNOWFLAKE: TableSpec(name="users_snowflake", key_column="snowflake_id"),
    Mode.ULID: TableSpec(name="users_ulid", key_column="ulid"),
}


def table_for(mode: Union[str, Mode]) -> TableSpec:
    return TABLES[Mode.parse(mode)]


class UserRow(BaseModel):
    """
    One synthetic row: the generated identifier plus a `User_<index>` name.
    """

    key: Union[int, str] = Field(..., description="Generated identifier.")
    name: str = Field(..., description="Deterministic display name.")

    model_config = {"frozen": True}

    @classmethod
    def for_index(cls, key: Union[int, str], index: int) -> "UserRow":
        return cls(key=key, name=f"User_{index}")

    def as_params(self) -> Tuple[Union[int, str], str]:
        return (self.key, self.name)


__all__ = ["Mode", "TableSpec", "TABLES", "table_for", "UserRow"]
