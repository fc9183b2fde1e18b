from collections.abc import Generator
from datetime import date

import pytest
from sqlalchemy.engine import Engine

from medrecords.config import Settings
from medrecords.database import create_engine_from_settings, init_schema
from medrecords.dependencies import Services, build_services
from medrecords.schemas import Department, Doctor, Patient
from medrecords.seed import load_sample_data


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'medrecords_test.db'}",
        db_pool_initial_size=2,
        db_pool_max_size=4,
        db_pool_timeout_seconds=2.0,
        log_format="console",
    )


@pytest.fixture
def engine(settings: Settings) -> Generator[Engine, None, None]:
    """Engine with a freshly created schema."""
    engine = create_engine_from_settings(settings)
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def services(settings: Settings, engine: Engine) -> Generator[Services, None, None]:
    """Pool, stores and services over an empty database."""
    services = build_services(settings, engine=engine)
    yield services
    services.close()


@pytest.fixture
def seeded(services: Services) -> dict[str, list[int]]:
    """Load the sample clinic data and return the generated ids."""
    return load_sample_data(services)


@pytest.fixture
def sample_patient() -> Patient:
    """Sample patient for testing."""
    return Patient(name="Alice Johnson", date_of_birth=date(1985, 4, 12), contact="555-1001")


@pytest.fixture
def doctor_id(services: Services) -> int:
    """Create a department with one doctor and return the doctor id."""
    department = services.departments.add(Department(name="Cardiology", location="Building A"))
    doctor = services.doctors.add(
        Doctor(name="John Smith", specialization="Cardiologist", department_id=department.id)
    )
    return doctor.id
