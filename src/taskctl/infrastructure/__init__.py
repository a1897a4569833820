"""Infrastructure layer: SQLite database and repositories.

This layer depends on stdlib and SQLAlchemy. Repositories are the one
bridge to the domain: they hand rows to :mod:`taskctl.mappers` and return
Task aggregates, so the service layer never sees raw rows.
"""
