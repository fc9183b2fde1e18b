"""Wiring of the pool, stores and services."""

from dataclasses import dataclass

import structlog
from sqlalchemy.engine import Engine

from medrecords.config import Settings, get_settings
from medrecords.core.pool import ConnectionPool
from medrecords.database import create_engine_from_settings
from medrecords.repositories import (
    AppointmentStore,
    DepartmentStore,
    DoctorStore,
    FeedbackStore,
    InventoryStore,
    PatientCascadeDeleter,
    PatientStore,
    PrescriptionItemStore,
    PrescriptionStore,
)
from medrecords.services import AppointmentService, DoctorService, PatientService

logger = structlog.get_logger()


@dataclass
class Services:
    """Every store and service sharing one connection pool."""

    engine: Engine
    pool: ConnectionPool
    patients: PatientService
    doctors: DoctorService
    appointments: AppointmentService
    departments: DepartmentStore
    prescriptions: PrescriptionStore
    prescription_items: PrescriptionItemStore
    feedback: FeedbackStore
    inventory: InventoryStore

    def close(self) -> None:
        """Shut down the pool and dispose of the engine."""
        self.pool.shutdown()
        self.engine.dispose()
        logger.info("services_closed")


def build_services(settings: Settings | None = None, engine: Engine | None = None) -> Services:
    """
    Build the connection pool and every store and service on top of it.

    Args:
        settings: Application settings; defaults to ``get_settings()``
        engine: Pre-built engine; built from settings when omitted

    Returns:
        Services container owning the pool
    """
    settings = settings or get_settings()
    engine = engine or create_engine_from_settings(settings)

    pool = ConnectionPool(
        engine,
        initial_size=settings.db_pool_initial_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
    )

    appointments = AppointmentService(AppointmentStore(pool))
    patients = PatientService(
        PatientStore(pool, cascade=PatientCascadeDeleter(pool)),
        dependents=[appointments],
    )

    return Services(
        engine=engine,
        pool=pool,
        patients=patients,
        doctors=DoctorService(DoctorStore(pool)),
        appointments=appointments,
        departments=DepartmentStore(pool),
        prescriptions=PrescriptionStore(pool),
        prescription_items=PrescriptionItemStore(pool),
        feedback=FeedbackStore(pool),
        inventory=InventoryStore(pool),
    )
