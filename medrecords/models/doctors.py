"""Doctors table model using SQLAlchemy Core."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table

from medrecords.models.base import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, index=True),
    Column("specialization", String(100)),
    Column(
        "department_id",
        Integer,
        ForeignKey("departments.id"),
        nullable=True,
        index=True,
    ),
)
