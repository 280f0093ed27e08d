"""Duration parsing and formatting core."""
