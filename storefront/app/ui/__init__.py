"""Console rendering and command input."""
