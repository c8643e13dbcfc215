"""Storage infrastructure: engine, schema, repositories, store handle."""
