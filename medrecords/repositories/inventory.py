"""Medical inventory store."""

from datetime import date

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from medrecords.models.medical_inventory import medical_inventory
from medrecords.repositories.base import RecordStore
from medrecords.schemas.inventory import MedicalInventoryItem


class InventoryStore(RecordStore[MedicalInventoryItem]):
    """Stocked medications."""

    table = medical_inventory
    entity = MedicalInventoryItem
    label = "inventory item"
    ordering = (medical_inventory.c.name,)
    search_columns = ("name",)

    def update_quantity(self, item_id: int, quantity: int) -> bool:
        """Set the stocked quantity of one item."""
        if quantity < 0:
            return False
        stmt = (
            update(medical_inventory)
            .where(medical_inventory.c.id == item_id)
            .values(quantity=quantity)
        )
        try:
            with self.pool.connection() as conn, conn.begin():
                updated = conn.execute(stmt).rowcount > 0
        except SQLAlchemyError as e:
            self._fail("update_quantity", e, id=item_id)
            return False
        return updated

    def get_low_stock(self, threshold: int) -> list[MedicalInventoryItem]:
        """Get items with fewer than ``threshold`` units, lowest first."""
        stmt = (
            self._select()
            .where(medical_inventory.c.quantity < threshold)
            .order_by(None)
            .order_by(medical_inventory.c.quantity, medical_inventory.c.id)
        )
        return self._fetch(stmt, "get_low_stock")

    def get_expired(self, today: date | None = None) -> list[MedicalInventoryItem]:
        """Get items whose expiry date has passed, oldest first."""
        today = today or date.today()
        stmt = (
            self._select()
            .where(medical_inventory.c.expiry_date < today)
            .order_by(None)
            .order_by(medical_inventory.c.expiry_date, medical_inventory.c.id)
        )
        return self._fetch(stmt, "get_expired")
