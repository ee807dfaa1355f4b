"""Simulated order submission."""
