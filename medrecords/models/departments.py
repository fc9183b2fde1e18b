"""Departments table model using SQLAlchemy Core."""

from sqlalchemy import Column, Integer, String, Table

from medrecords.models.base import metadata

departments = Table(
    "departments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("location", String(100)),
)
