"""Physical table names for the movies and Shopify schemas.

Schema, query and stage code take one of these registries as an argument
instead of spelling table names out.
"""

from dataclasses import dataclass, fields
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class MovieTables:
    """Tables of the movies schema."""

    movies: str = "movies"
    movie_ratings: str = "movie_ratings"
    genres: str = "genres"
    actors: str = "actors"
    directors: str = "directors"
    keywords: str = "keywords"
    production_companies: str = "production_companies"

    # Junction tables
    movie_genres: str = "movie_genres"
    movie_actors: str = "movie_actors"
    movie_directors: str = "movie_directors"
    movie_keywords: str = "movie_keywords"
    movie_production_companies: str = "movie_production_companies"

    domain = "movies"

    @property
    def entity_tables(self) -> Tuple[str, ...]:
        return (
            self.movies,
            self.movie_ratings,
            self.genres,
            self.actors,
            self.directors,
            self.keywords,
            self.production_companies,
        )

    @property
    def relationship_tables(self) -> Tuple[str, ...]:
        return (
            self.movie_genres,
            self.movie_actors,
            self.movie_directors,
            self.movie_keywords,
            self.movie_production_companies,
        )

    @property
    def all_tables(self) -> Tuple[str, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class ShopifyTables:
    """Tables of the Shopify app store schema."""

    apps: str = "apps"
    categories: str = "categories"
    reviews: str = "reviews"
    pricing_plans: str = "pricing_plans"
    key_benefits: str = "key_benefits"

    # Junction tables
    apps_categories: str = "apps_categories"
    apps_pricing_plans: str = "apps_pricing_plans"

    domain = "shopify"

    @property
    def entity_tables(self) -> Tuple[str, ...]:
        return (
            self.apps,
            self.categories,
            self.reviews,
            self.pricing_plans,
            self.key_benefits,
        )

    @property
    def relationship_tables(self) -> Tuple[str, ...]:
        return (self.apps_categories, self.apps_pricing_plans)

    @property
    def all_tables(self) -> Tuple[str, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))


TableRegistry = Union[MovieTables, ShopifyTables]

MOVIE_TABLES = MovieTables()
SHOPIFY_TABLES = ShopifyTables()

_REGISTRIES: Dict[str, TableRegistry] = {
    MOVIE_TABLES.domain: MOVIE_TABLES,
    SHOPIFY_TABLES.domain: SHOPIFY_TABLES,
}

DOMAINS = tuple(_REGISTRIES)


def registry_for(domain: str) -> TableRegistry:
    """Return the table registry of ``domain`` ("movies" or "shopify")."""
    return _REGISTRIES[domain]
