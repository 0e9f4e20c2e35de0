"""Movies schema: entity tables, lookup indexes and junction tables."""

from typing import List, Tuple

from ..models import RelationshipTable
from ..table_names import MOVIE_TABLES, MovieTables


def entity_tables(tables: MovieTables = MOVIE_TABLES) -> List[str]:
    return [
        f"""
        CREATE TABLE {tables.movies} (
          id integer NOT NULL PRIMARY KEY,
          imdb_id text NOT NULL UNIQUE,
          popularity real NOT NULL,
          budget real NOT NULL,
          budget_adjusted real NOT NULL,
          revenue real NOT NULL,
          revenue_adjusted real NOT NULL,
          original_title text NOT NULL,
          homepage text,
          tagline text,
          overview text,
          runtime integer NOT NULL,
          release_date text NOT NULL
        )""",
        f"""
        CREATE TABLE {tables.movie_ratings} (
          movie_id integer NOT NULL PRIMARY KEY,
          vote_count integer NOT NULL,
          vote_average real NOT NULL,
          FOREIGN KEY (movie_id) REFERENCES {tables.movies}(id)
        )""",
        f"""
        CREATE TABLE {tables.genres} (
          id integer NOT NULL PRIMARY KEY,
          genre text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.actors} (
          id integer NOT NULL PRIMARY KEY,
          full_name text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.directors} (
          id integer NOT NULL PRIMARY KEY,
          full_name text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.keywords} (
          id integer NOT NULL PRIMARY KEY,
          keyword text NOT NULL UNIQUE
        )""",
        f"""
        CREATE TABLE {tables.production_companies} (
          id integer NOT NULL PRIMARY KEY,
          company_name text NOT NULL UNIQUE
        )""",
    ]


def lookup_indexes(tables: MovieTables = MOVIE_TABLES) -> List[str]:
    return [
        f"CREATE INDEX movies_original_title_idx ON {tables.movies} (original_title)",
        f"CREATE INDEX movies_release_date_idx ON {tables.movies} (release_date)",
        f"CREATE INDEX movie_ratings_vote_average_idx ON {tables.movie_ratings} (vote_average)",
    ]


def relationship_descriptors(tables: MovieTables = MOVIE_TABLES) -> Tuple[RelationshipTable, ...]:
    movie = ("movie_id", tables.movies)
    return (
        RelationshipTable(tables.movie_genres, movie, ("genre_id", tables.genres)),
        RelationshipTable(tables.movie_actors, movie, ("actor_id", tables.actors)),
        RelationshipTable(tables.movie_directors, movie, ("director_id", tables.directors)),
        RelationshipTable(tables.movie_keywords, movie, ("keyword_id", tables.keywords)),
        RelationshipTable(
            tables.movie_production_companies,
            movie,
            ("company_id", tables.production_companies),
        ),
    )


def create_relationship_table(table: RelationshipTable) -> str:
    """CREATE TABLE for a junction table: two NOT NULL integer keys, both
    in the primary key, each referencing its parent's ``id``."""
    (left, left_parent), (right, right_parent) = table.left, table.right
    return f"""
        CREATE TABLE {table.name} (
          {left} integer NOT NULL,
          {right} integer NOT NULL,
          PRIMARY KEY ({left}, {right}),
          FOREIGN KEY ({left}) REFERENCES {left_parent}(id),
          FOREIGN KEY ({right}) REFERENCES {right_parent}(id)
        )"""


def relationship_tables(tables: MovieTables = MOVIE_TABLES) -> List[str]:
    return [create_relationship_table(t) for t in relationship_descriptors(tables)]
