"""SQL statement builders.

Builders never touch the database. Those taking caller-supplied values
return a :class:`Query` with ``?`` placeholders; those taking only
identifiers return plain SQL text.
"""

from .analytics import (
    free_plan_app_count,
    top_categories,
    top_prices_in_range,
)
from .select import (
    Query,
    quote_identifier,
    select_app_categories_by_app_id,
    select_category_by_title,
    select_column_from_table,
    select_count,
    select_review_by_app_id_author,
    select_row_by_id,
    select_unique_row_count,
)
from .table_info import select_table_exists, table_info

__all__ = [
    "Query",
    "free_plan_app_count",
    "quote_identifier",
    "select_app_categories_by_app_id",
    "select_category_by_title",
    "select_column_from_table",
    "select_count",
    "select_review_by_app_id_author",
    "select_row_by_id",
    "select_table_exists",
    "select_unique_row_count",
    "table_info",
    "top_categories",
    "top_prices_in_range",
]
