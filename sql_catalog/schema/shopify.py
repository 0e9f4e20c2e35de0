"""Shopify app store schema."""

from typing import List, Tuple

from ..models import RelationshipTable
from ..table_names import SHOPIFY_TABLES, ShopifyTables
from .movies import create_relationship_table


def entity_tables(tables: ShopifyTables = SHOPIFY_TABLES) -> List[str]:
    return [
        f"""
        CREATE TABLE {tables.apps} (
          id integer NOT NULL PRIMARY KEY,
          url text NOT NULL UNIQUE,
          title text NOT NULL,
          developer text,
          developer_link text,
          icon text,
          rating real,
          reviews_count integer,
          description text,
          tagline text,
          pricing_hint text
        )""",
        f"""
        CREATE TABLE {tables.categories} (
          id integer NOT NULL PRIMARY KEY,
          title text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.reviews} (
          app_id integer NOT NULL,
          author text NOT NULL,
          rating integer NOT NULL,
          posted_at text,
          body text,
          helpful_count integer,
          developer_reply text,
          developer_reply_posted_at text,
          FOREIGN KEY (app_id) REFERENCES {tables.apps}(id)
        )""",
        f"""
        CREATE TABLE {tables.pricing_plans} (
          id integer NOT NULL PRIMARY KEY,
          price text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.key_benefits} (
          app_id integer NOT NULL,
          title text NOT NULL,
          description text,
          PRIMARY KEY (app_id, title),
          FOREIGN KEY (app_id) REFERENCES {tables.apps}(id)
        )""",
    ]


def relationship_descriptors(tables: ShopifyTables = SHOPIFY_TABLES) -> Tuple[RelationshipTable, ...]:
    app = ("app_id", tables.apps)
    return (
        RelationshipTable(tables.apps_categories, app, ("category_id", tables.categories)),
        RelationshipTable(
            tables.apps_pricing_plans, app, ("pricing_plan_id", tables.pricing_plans)
        ),
    )


def relationship_tables(tables: ShopifyTables = SHOPIFY_TABLES) -> List[str]:
    return [create_relationship_table(t) for t in relationship_descriptors(tables)]


def lookup_indexes(tables: ShopifyTables = SHOPIFY_TABLES) -> List[str]:
    return [
        f"CREATE INDEX reviews_app_id_author_idx ON {tables.reviews} (app_id, author)",
        f"CREATE INDEX apps_categories_category_id_idx ON {tables.apps_categories} (category_id)",
        f"CREATE INDEX apps_pricing_plans_plan_id_idx "
        f"ON {tables.apps_pricing_plans} (pricing_plan_id)",
    ]
