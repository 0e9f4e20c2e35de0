"""Tests for SQL text utilities."""

import pytest

from sql_catalog.sql_parser import (
    get_statement_type,
    load_sql_file,
    returns_rows,
    split_statements,
    truncate_query_text,
)


def test_split_statements_drops_comments_and_semicolons():
    script = """
    -- create
    CREATE TABLE a (id integer);
    /* fill */
    INSERT INTO a VALUES (1);;
    """
    assert split_statements(script) == [
        "CREATE TABLE a (id integer)",
        "INSERT INTO a VALUES (1)",
    ]


def test_split_statements_empty():
    assert split_statements("  -- nothing here\n") == []


@pytest.mark.parametrize(
    "sql, expected",
    [
        ("SELECT 1", "SELECT"),
        ("insert into a values (1)", "INSERT"),
        ("CREATE TABLE a (id integer)", "CREATE"),
        ("PRAGMA table_info(a)", "PRAGMA"),
    ],
)
def test_get_statement_type(sql, expected):
    assert get_statement_type(sql) == expected


def test_returns_rows():
    assert returns_rows("SELECT * FROM apps")
    assert returns_rows("PRAGMA table_info(apps)")
    assert not returns_rows("DELETE FROM apps")


def test_truncate_query_text():
    assert truncate_query_text("SELECT\n   1") == "SELECT 1"
    assert truncate_query_text("x" * 10, max_length=4) == "xxxx..."


def test_load_sql_file(tmp_path):
    path = tmp_path / "q.sql"
    path.write_text("SELECT 1;", encoding="utf-8")
    assert load_sql_file(str(path)) == "SELECT 1;"


def test_load_sql_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sql_file(str(tmp_path / "missing.sql"))


def test_load_sql_file_empty(tmp_path):
    path = tmp_path / "empty.sql"
    path.write_text("   \n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_sql_file(str(path))
