"""Doctor record store."""

from sqlalchemy import String, cast, or_, select
from sqlalchemy.sql import Select

from medrecords.models.departments import departments
from medrecords.models.doctors import doctors
from medrecords.repositories.base import RecordStore
from medrecords.schemas.doctors import Doctor, DoctorDetail


class DoctorStore(RecordStore[Doctor]):
    """Doctors, optionally attached to a department."""

    table = doctors
    entity = Doctor
    label = "doctor"
    ordering = (doctors.c.name,)
    search_columns = ("name", "specialization")

    def get_by_department(self, department_id: int) -> list[Doctor]:
        """Get doctors of one department."""
        return self._where(doctors.c.department_id == department_id, operation="get_by_department")

    def _detail_select(self) -> Select:
        return (
            select(doctors, departments.c.name.label("department_name"))
            .select_from(
                doctors.outerjoin(departments, doctors.c.department_id == departments.c.id)
            )
            .order_by(doctors.c.name, doctors.c.id)
        )

    def get_all_with_department(self) -> list[DoctorDetail]:
        """Get all doctors with their department name."""
        return self._fetch(self._detail_select(), "get_all_with_department", DoctorDetail)

    def search_with_department(self, query: str) -> list[DoctorDetail]:
        """Search doctors by id, name, specialization or department name."""
        query = query.strip()
        if not query:
            return self.get_all_with_department()
        stmt = self._detail_select().where(
            or_(
                cast(doctors.c.id, String).icontains(query, autoescape=True),
                doctors.c.name.icontains(query, autoescape=True),
                doctors.c.specialization.icontains(query, autoescape=True),
                departments.c.name.icontains(query, autoescape=True),
            )
        )
        return self._fetch(stmt, "search_with_department", DoctorDetail)
