"""Doctor service."""

from medrecords.schemas.doctors import Doctor
from medrecords.services.base import CachedRecordService


class DoctorService(CachedRecordService[Doctor]):
    """Cached doctors."""

    text_fields = ("name", "specialization")

    def get_by_department(self, department_id: int) -> list[Doctor]:
        """Get a department's doctors from the cache."""
        return self.cache.filter(lambda d: d.department_id == department_id)
