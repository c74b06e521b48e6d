"""Love Letter rules engine."""
