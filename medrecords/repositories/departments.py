"""Department record store."""

from medrecords.models.departments import departments
from medrecords.repositories.base import RecordStore
from medrecords.schemas.departments import Department


class DepartmentStore(RecordStore[Department]):
    """Hospital departments."""

    table = departments
    entity = Department
    label = "department"
    ordering = (departments.c.name,)
    search_columns = ("name", "location")
