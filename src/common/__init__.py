"""Cross-cutting utilities: logging and the record store repositories."""
