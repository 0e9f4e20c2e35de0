"""Analytical queries across the Shopify app tables."""

from ..table_names import SHOPIFY_TABLES, ShopifyTables
from .select import Query, quote_identifier


def free_plan_app_count(tables: ShopifyTables = SHOPIFY_TABLES) -> str:
    """Count apps linked to a pricing plan whose price mentions "Free".

    An app with several free plans is counted once per plan.
    """
    apps = quote_identifier(tables.apps)
    link = quote_identifier(tables.apps_pricing_plans)
    plans = quote_identifier(tables.pricing_plans)
    return (
        f"SELECT COUNT(app_id) AS count FROM {apps} "
        f"JOIN {link} ON {apps}.id = {link}.app_id "
        f"JOIN {plans} ON {link}.pricing_plan_id = {plans}.id "
        f"WHERE price LIKE '%Free%'"
    )


def top_categories(limit: int = 3, tables: ShopifyTables = SHOPIFY_TABLES) -> Query:
    """Most common categories by number of apps, most frequent first."""
    link = quote_identifier(tables.apps_categories)
    sql = (
        f"SELECT COUNT(categ.title) AS count, categ.title AS category FROM {link} "
        f"JOIN {quote_identifier(tables.apps)} ap ON {link}.app_id = ap.id "
        f"JOIN {quote_identifier(tables.categories)} categ "
        f"ON {link}.category_id = categ.id "
        f"GROUP BY categ.title "
        f"ORDER BY count DESC "
        f"LIMIT ?"
    )
    return Query(sql, (limit,))


def top_prices_in_range(
    low: float = 5,
    high: float = 10,
    limit: int = 3,
    tables: ShopifyTables = SHOPIFY_TABLES,
) -> Query:
    """Most frequent prices between ``low`` and ``high`` dollars, inclusive.

    The numeric value is read from the price text after its currency sign,
    so "$9.99/month" and "$9.99 one time charge" both count as 9.99.
    """
    link = quote_identifier(tables.apps_pricing_plans)
    apps = quote_identifier(tables.apps)
    plans = quote_identifier(tables.pricing_plans)
    sql = (
        f"SELECT COUNT(price) AS count, price, "
        f"CAST(substr(price, 2) AS REAL) AS casted_price FROM {link} "
        f"JOIN {apps} ON {link}.app_id = {apps}.id "
        f"JOIN {plans} ON {link}.pricing_plan_id = {plans}.id "
        f"WHERE price NOT LIKE 'Free' "
        f"AND casted_price >= ? "
        f"AND casted_price <= ? "
        f"GROUP BY casted_price "
        f"ORDER BY count DESC "
        f"LIMIT ?"
    )
    return Query(sql, (low, high, limit))
