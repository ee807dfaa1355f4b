"""Catalog provider and loader."""
