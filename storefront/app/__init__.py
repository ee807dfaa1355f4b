"""Storefront console application."""
