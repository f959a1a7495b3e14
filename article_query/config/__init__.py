"""Configuration for the article query service."""
