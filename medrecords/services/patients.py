"""Patient service."""

from collections.abc import Iterable

import structlog

from medrecords.repositories.patients import PatientStore
from medrecords.schemas.patients import Patient
from medrecords.services.base import CachedRecordService

logger = structlog.get_logger()


class PatientService(CachedRecordService[Patient]):
    """Cached patients.

    Deleting a patient also removes its appointments, so services caching
    dependent records are invalidated after a successful delete.
    """

    text_fields = ("name",)

    def __init__(
        self,
        store: PatientStore,
        dependents: Iterable[CachedRecordService] = (),
    ):
        """Initialize service with its store and dependent services."""
        super().__init__(store)
        self.dependents = list(dependents)

    def delete(self, entity_id: int) -> bool:
        """Delete a patient with all of its records."""
        deleted = super().delete(entity_id)
        if deleted:
            for service in self.dependents:
                service.invalidate()
            logger.info("patient_deleted", patient_id=entity_id, invalidated=len(self.dependents))
        return deleted
