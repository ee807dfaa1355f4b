"""View navigation, selection and search."""
