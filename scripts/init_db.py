"""Script to initialize the database."""

import sys

from medrecords.config import get_settings
from medrecords.core.logging import configure_logging
from medrecords.database import create_engine_from_settings, init_schema
from medrecords.dependencies import build_services
from medrecords.seed import load_sample_data


def init_db(with_sample_data: bool = False) -> None:
    """Initialize the database by creating all tables."""
    settings = get_settings()
    configure_logging(settings)

    engine = create_engine_from_settings(settings)
    init_schema(engine)
    print("✓ Database initialized successfully!")

    if not with_sample_data:
        engine.dispose()
        return

    services = build_services(settings, engine=engine)
    try:
        load_sample_data(services)
        print("✓ Sample data loaded!")
    finally:
        services.close()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] not in ("--sample-data",):
        print("Usage: python scripts/init_db.py [--sample-data]")
        sys.exit(1)
    init_db(with_sample_data="--sample-data" in sys.argv[1:])
