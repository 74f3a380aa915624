"""Application services managed by the ServiceContainer."""
