"""SQLite persistence: connection handler, SQL operation mixins, repositories."""
