"""Repositories mapping database rows to domain aggregates."""
