"""Medical inventory table model using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, Date, Integer, String, Table, text

from medrecords.models.base import metadata

medical_inventory = Table(
    "medical_inventory",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("quantity", Integer, nullable=False, server_default=text("0")),
    Column("expiry_date", Date),
    CheckConstraint("quantity >= 0", name="medical_inventory_quantity_check"),
)
