"""
Shared pytest fixtures for all tests.
Provides temporary snapshot/data directories and small CSV datasets for both
schemas, so stages can run without the full reference exports.
"""
import csv
import os
import shutil
from pathlib import Path
from typing import Dict, List, Sequence

import pytest
import pytest_asyncio

from sql_catalog.config import DatabaseConfig
from sql_catalog.database import Database


def write_csv(path: Path, header: Sequence[str], rows: List[Sequence]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


def write_dataset(data_dir: Path, tables: Dict[str, tuple]) -> None:
    for table, (header, rows) in tables.items():
        write_csv(data_dir / f"{table}.csv", header, rows)


# =============================================================================
# Synthetic datasets
# =============================================================================

MOVIE_DATA = {
    "movies": (
        ["id", "imdb_id", "popularity", "budget", "budget_adjusted", "revenue",
         "revenue_adjusted", "original_title", "homepage", "tagline", "overview",
         "runtime", "release_date"],
        [
            [1, "tt0369610", "32.98", "150000000", "137999939.3", "1513528810",
             "1392445893", "Jurassic World", "http://www.jurassicworld.com/",
             "The park is open.", "Twenty-two years after...", 124, "2015-06-09"],
            [2, "tt1392190", "28.42", "150000000", "137999939.3", "378436354",
             "348161292.5", "Mad Max: Fury Road", "", "What a Lovely Day.",
             "An apocalyptic story...", 120, "2015-05-13"],
        ],
    ),
    "movie_ratings": (
        ["movie_id", "vote_count", "vote_average"],
        [[1, 5562, "6.5"], [2, 6185, "7.1"]],
    ),
    "genres": (["id", "genre"], [[1, "Action"], [2, "Adventure"], [3, "Thriller"]]),
    "actors": (["id", "full_name"], [[1, "Chris Pratt"], [2, "Tom Hardy"]]),
    "directors": (["id", "full_name"], [[1, "Colin Trevorrow"], [2, "George Miller"]]),
    "keywords": (["id", "keyword"], [[1, "dinosaur"], [2, "future"]]),
    "production_companies": (
        ["id", "company_name"],
        [[1, "Universal Studios"], [2, "Village Roadshow Pictures"]],
    ),
}

MOVIE_RELATIONSHIP_DATA = {
    "movie_genres": (["movie_id", "genre_id"], [[1, 1], [1, 2], [2, 1], [2, 3]]),
    "movie_actors": (["movie_id", "actor_id"], [[1, 1], [2, 2]]),
    "movie_directors": (["movie_id", "director_id"], [[1, 1], [2, 2]]),
    "movie_keywords": (["movie_id", "keyword_id"], [[1, 1], [2, 2]]),
    "movie_production_companies": (["movie_id", "company_id"], [[1, 1], [2, 2]]),
}

SHOPIFY_DATA = {
    "apps": (
        ["id", "url", "title", "developer", "rating", "reviews_count"],
        [
            [1, "https://apps.shopify.com/pagefly", "PageFly", "PageFly", "4.9", 4520],
            [2, "https://apps.shopify.com/gempages", "GemPages", "GemPages", "4.8", 2100],
            [3, "https://apps.shopify.com/shogun", "Shogun", "Shogun", "4.7", 1900],
            [4, "https://apps.shopify.com/vitals", "Vitals", "Vitals", "4.9", 2800],
            [5, "https://apps.shopify.com/reconvert", "ReConvert", "ReConvert", "4.9", 3300],
            [6, "https://apps.shopify.com/klaviyo", "Klaviyo", "Klaviyo", "4.6", 1200],
        ],
    ),
    "categories": (
        ["id", "title"],
        [
            [1, "Store design"],
            [2, "Sales and conversion optimization"],
            [3, "Marketing"],
            [4, "Orders and shipping"],
        ],
    ),
    "reviews": (
        ["app_id", "author", "rating", "body"],
        [
            [1, "Sunny Days Boutique", 5, "Great page builder."],
            [1, "Crafty Cat", 4, "Does the job."],
            [6, "Crafty Cat", 5, "Emails work well."],
        ],
    ),
    "pricing_plans": (
        ["id", "price"],
        [
            [1, "Free"],
            [2, "Free to install"],
            [3, "$9.99/month"],
            [4, "$5/month"],
            [5, "$10/month"],
            [6, "$4.99/month"],
            [7, "$15/month"],
        ],
    ),
    "key_benefits": (
        ["app_id", "title", "description"],
        [[1, "Drag and drop", "Build pages without code."]],
    ),
}

SHOPIFY_RELATIONSHIP_DATA = {
    # Store design x4, Sales x3, Marketing x2, Orders x1
    "apps_categories": (
        ["app_id", "category_id"],
        [[1, 1], [2, 1], [3, 1], [4, 1], [1, 2], [2, 2], [5, 2], [3, 3], [6, 3], [6, 4]],
    ),
    # Free plans: 3 links; $9.99 x3, $5 x2, $10 x1, $4.99 x1, $15 x1
    "apps_pricing_plans": (
        ["app_id", "pricing_plan_id"],
        [[1, 1], [1, 3], [2, 2], [2, 3], [3, 3], [4, 4], [5, 4], [5, 5], [6, 6], [6, 7], [6, 1]],
    ),
}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db_config(tmp_path: Path) -> DatabaseConfig:
    """Config pointing snapshots and data files at a temporary directory."""
    return DatabaseConfig(
        snapshot_dir=str(tmp_path / "db"),
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def movie_data(db_config: DatabaseConfig) -> Path:
    data_dir = Path(db_config.data_dir) / "movies"
    write_dataset(data_dir, {**MOVIE_DATA, **MOVIE_RELATIONSHIP_DATA})
    return data_dir


@pytest.fixture
def shopify_data(db_config: DatabaseConfig) -> Path:
    data_dir = Path(db_config.data_dir) / "shopify"
    write_dataset(data_dir, {**SHOPIFY_DATA, **SHOPIFY_RELATIONSHIP_DATA})
    return data_dir


@pytest_asyncio.fixture
async def fresh_db(tmp_path: Path):
    """An open, empty database that is closed after the test."""
    db = await Database.open_fresh(tmp_path / "fresh.sqlite3")
    yield db
    await db.close()


@pytest.fixture
def reference_config(tmp_path: Path) -> DatabaseConfig:
    """Config holding a copy of the reference Shopify snapshot "03".

    Skips unless SQL_CATALOG_REFERENCE_DIR points at a directory containing
    shopify-03.sqlite3 built from the full Shopify app store export.
    """
    ref_dir = os.getenv("SQL_CATALOG_REFERENCE_DIR")
    if not ref_dir:
        pytest.skip("SQL_CATALOG_REFERENCE_DIR not set")
    source = DatabaseConfig(snapshot_dir=ref_dir).snapshot_path("shopify", "03")
    if not source.is_file():
        pytest.skip(f"Reference snapshot not found: {source}")

    config = DatabaseConfig(snapshot_dir=str(tmp_path / "db"))
    target = config.snapshot_path("shopify", "03")
    target.parent.mkdir(parents=True)
    shutil.copyfile(source, target)
    return config


@pytest.fixture
def csv_writer():
    return write_csv
