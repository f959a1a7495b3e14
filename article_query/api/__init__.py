"""HTTP adapter for the article query engine."""
