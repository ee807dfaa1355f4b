"""Cart line management."""
