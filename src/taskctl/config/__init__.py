"""Configuration: TOML discovery, settings models, and logging."""
