from __future__ import annotations

import pydantic
import pytest

from idbench.config import Settings
from idbench.domain.models import TABLES, Mode, UserRow, table_for
from idbench.errors import IdBenchError, InvalidModeError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("uuid", Mode.UUID),
        ("Snowflake", Mode.SNOWFLAKE),
        ("  ulid ", Mode.ULID),
        (Mode.ULID, Mode.ULID),
    ],
)
def test_mode_parse_accepts_known_names(value, expected):
    assert Mode.parse(value) is expected


def test_mode_parse_rejects_unknown_name():
    with pytest.raises(InvalidModeError) as excinfo:
        Mode.parse("bogus")

    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, IdBenchError)
    assert "bogus" in str(excinfo.value)
    assert excinfo.value.available == ["uuid", "snowflake", "ulid"]


def test_each_mode_targets_its_own_table():
    assert table_for("uuid").name == "users_uuid"
    assert table_for("uuid").key_column == "uuid"
    assert table_for("snowflake").key_column == "snowflake_id"
    assert table_for("ulid").name == "users_ulid"
    assert len({t.name for t in TABLES.values()}) == len(Mode)


def test_statement_name_derives_from_table():
    assert table_for(Mode.SNOWFLAKE).statement_name == "insert_users_snowflake"


def test_user_row_for_index_builds_deterministic_name():
    row = UserRow.for_index(12345, 7)

    assert row.name == "User_7"
    assert row.as_params() == (12345, "User_7")


def test_user_row_is_frozen():
    row = UserRow.for_index("01ARZ3NDEKTSV4RRFFQ69G5FAV", 0)

    with pytest.raises(pydantic.ValidationError):
        row.name = "other"  # type: ignore[misc]


def test_settings_defaults(monkeypatch):
    for var in ("BENCH_MODE", "BENCH_ROWS", "BENCH_PROGRESS_INTERVAL", "SNOWFLAKE_NODE"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings(_env_file=None)

    assert settings.bench_mode == "uuid"
    assert settings.bench_rows == 1_000_000
    assert settings.bench_progress_interval == 10_000
    assert settings.snowflake_node is None
