"""SQLAlchemy Core table definitions for the taskctl database."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),  # internal surrogate key
    Column("task_id", Text, nullable=False, unique=True),  # T-NNN
    Column("title", Text, nullable=False),
    Column("status", Boolean, nullable=False, default=False, server_default="0"),
    Column("date_created", Text, nullable=False),  # ISO 8601
)

Index("ix_tasks_date_created", tasks.c.date_created)
