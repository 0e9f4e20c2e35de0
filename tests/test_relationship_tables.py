"""Creating the movies relationship tables on top of snapshot "03"."""

import pytest
import pytest_asyncio

from sql_catalog.database import Database
from sql_catalog.errors import QueryError
from sql_catalog.queries import table_info
from sql_catalog.schema import movies
from sql_catalog.stages import run_all
from sql_catalog.table_names import MOVIE_TABLES

EXPECTED_COLUMNS = {
    MOVIE_TABLES.movie_genres: [
        {"name": "movie_id", "type": "integer"},
        {"name": "genre_id", "type": "integer"},
    ],
    MOVIE_TABLES.movie_actors: [
        {"name": "movie_id", "type": "integer"},
        {"name": "actor_id", "type": "integer"},
    ],
    MOVIE_TABLES.movie_directors: [
        {"name": "movie_id", "type": "integer"},
        {"name": "director_id", "type": "integer"},
    ],
    MOVIE_TABLES.movie_keywords: [
        {"name": "movie_id", "type": "integer"},
        {"name": "keyword_id", "type": "integer"},
    ],
    MOVIE_TABLES.movie_production_companies: [
        {"name": "movie_id", "type": "integer"},
        {"name": "company_id", "type": "integer"},
    ],
}


@pytest_asyncio.fixture
async def db(db_config, movie_data):
    await run_all("movies", db_config, until="03")
    db = await Database.from_existing("03", "04", domain="movies", config=db_config)
    for query in movies.relationship_tables():
        await db.create_table(query)
    yield db
    await db.close()


@pytest.mark.asyncio
async def test_creates_relationship_tables(db):
    for table in MOVIE_TABLES.relationship_tables:
        assert await db.table_exists(table), table


@pytest.mark.asyncio
async def test_columns_and_types(db):
    for table in MOVIE_TABLES.relationship_tables:
        rows = await db.fetch_many(table_info(table))
        columns = [{"name": row["name"], "type": row["type"]} for row in rows]
        assert columns == EXPECTED_COLUMNS[table]


@pytest.mark.asyncio
async def test_primary_keys(db):
    for table in MOVIE_TABLES.relationship_tables:
        for col in await db.column_info(table):
            assert col.is_primary_key == col.name.endswith("_id"), f"{table}.{col.name}"


@pytest.mark.asyncio
async def test_not_null_constraints(db):
    for table in MOVIE_TABLES.relationship_tables:
        for col in await db.column_info(table):
            assert col.not_null, f"{table}.{col.name}"


@pytest.mark.asyncio
async def test_composite_key_rejects_duplicates(db):
    await db.execute("INSERT INTO movie_genres (movie_id, genre_id) VALUES (1, 1)")
    with pytest.raises(QueryError):
        await db.execute("INSERT INTO movie_genres (movie_id, genre_id) VALUES (1, 1)")


@pytest.mark.asyncio
async def test_foreign_keys_reference_parents(db):
    rows = await db.fetch_many("PRAGMA foreign_key_list(movie_production_companies)")
    assert {(r["from"], r["table"], r["to"]) for r in rows} == {
        ("movie_id", "movies", "id"),
        ("company_id", "production_companies", "id"),
    }
