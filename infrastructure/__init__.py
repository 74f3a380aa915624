"""Infrastructure layer: persistence and logging adapters."""
