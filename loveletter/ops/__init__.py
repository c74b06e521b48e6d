"""Configuration loading for local play."""
