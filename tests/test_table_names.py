"""Tests for the table name registries."""

import dataclasses

import pytest

from sql_catalog.table_names import (
    DOMAINS,
    MOVIE_TABLES,
    SHOPIFY_TABLES,
    MovieTables,
    registry_for,
)


def test_movie_relationship_tables_in_order():
    assert MOVIE_TABLES.relationship_tables == (
        "movie_genres",
        "movie_actors",
        "movie_directors",
        "movie_keywords",
        "movie_production_companies",
    )


def test_shopify_relationship_tables():
    assert SHOPIFY_TABLES.relationship_tables == ("apps_categories", "apps_pricing_plans")


def test_all_tables_cover_entities_and_relationships():
    for tables in (MOVIE_TABLES, SHOPIFY_TABLES):
        assert set(tables.all_tables) == set(tables.entity_tables) | set(tables.relationship_tables)
        assert len(tables.all_tables) == len(set(tables.all_tables))


def test_registry_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MOVIE_TABLES.movies = "films"


def test_registry_for_domain():
    assert DOMAINS == ("movies", "shopify")
    assert registry_for("movies") is MOVIE_TABLES
    assert registry_for("shopify") is SHOPIFY_TABLES


def test_registry_for_unknown_domain():
    with pytest.raises(KeyError):
        registry_for("books")


def test_custom_registry_flows_into_groupings():
    tables = MovieTables(movie_genres="film_genres")
    assert tables.relationship_tables[0] == "film_genres"
