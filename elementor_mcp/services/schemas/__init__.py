"""Control to JSON Schema mapping."""
