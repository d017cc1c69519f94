"""Desktop simulator for LIGHTFIELD (requires pygame)."""
