"""SQL operation mixins composed into the database handler."""
