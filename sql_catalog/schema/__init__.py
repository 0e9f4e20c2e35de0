"""DDL for the movies and Shopify schemas."""

from . import movies, shopify

__all__ = ["movies", "shopify"]
