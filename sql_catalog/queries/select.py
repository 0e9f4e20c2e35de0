"""Row lookups and counts over the catalog tables."""

from typing import Any, NamedTuple, Tuple

from ..table_names import SHOPIFY_TABLES, ShopifyTables


class Query(NamedTuple):
    """SQL text plus the values bound to its ``?`` placeholders."""

    sql: str
    params: Tuple[Any, ...] = ()


def quote_identifier(name: str) -> str:
    """Quote a table or column name for SQLite.

    Embedded double quotes are doubled, so the result is always a single
    identifier token.
    """
    return '"' + name.replace('"', '""') + '"'


def select_count(table: str) -> str:
    return f"SELECT COUNT(*) AS c FROM {quote_identifier(table)}"


def select_row_by_id(row_id: int, table: str) -> Query:
    return Query(
        f"SELECT * FROM {quote_identifier(table)} WHERE id = ?",
        (row_id,),
    )


def select_category_by_title(
    title: str, tables: ShopifyTables = SHOPIFY_TABLES
) -> Query:
    return Query(
        f"SELECT * FROM {quote_identifier(tables.categories)} WHERE title = ?",
        (title,),
    )


def select_app_categories_by_app_id(
    app_id: int, tables: ShopifyTables = SHOPIFY_TABLES
) -> Query:
    """Categories of one app, with the app and category titles resolved."""
    link = quote_identifier(tables.apps_categories)
    sql = (
        f"SELECT app.title AS app_title, category_id, categ.title AS category_title "
        f"FROM {link} "
        f"JOIN {quote_identifier(tables.apps)} app ON {link}.app_id = app.id "
        f"JOIN {quote_identifier(tables.categories)} categ "
        f"ON {link}.category_id = categ.id "
        f"WHERE app_id = ?"
    )
    return Query(sql, (app_id,))


def select_unique_row_count(table: str, column: str) -> str:
    return (
        f"SELECT COUNT(DISTINCT {quote_identifier(column)}) AS c "
        f"FROM {quote_identifier(table)}"
    )


def select_review_by_app_id_author(
    app_id: int, author: str, tables: ShopifyTables = SHOPIFY_TABLES
) -> Query:
    return Query(
        f"SELECT * FROM {quote_identifier(tables.reviews)} "
        f"WHERE app_id = ? AND author = ?",
        (app_id, author),
    )


def select_column_from_table(column: str, table: str) -> str:
    return f"SELECT {quote_identifier(column)} FROM {quote_identifier(table)}"
