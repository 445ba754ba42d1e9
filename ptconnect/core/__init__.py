"""Pure aggregation logic: no database, no Flask request state."""
