"""Output formatting for CLI results (human via Rich, or JSON)."""
