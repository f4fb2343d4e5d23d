"""Tile resolution and caching pipeline."""
