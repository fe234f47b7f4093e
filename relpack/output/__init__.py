"""User-facing output: console backends and error presentation."""
