"""
Legacy CSV Import Script
Loads user lists and internship/application record files into the database

Usage:
    python scripts/import_legacy_csv.py sample_file/
    python scripts/import_legacy_csv.py sample_file/ --database-url sqlite+aiosqlite:///./internhub.db
"""
import argparse
import asyncio
from pathlib import Path

from loguru import logger

from internhub.core.database import close_db, create_engine, create_session_factory, init_db
from internhub.core.logging_config import configure_logging
from internhub.infrastructure.persistence.csv_records import (
    read_applications,
    read_internships,
    read_representatives,
    read_staff,
    read_students,
)
from internhub.infrastructure.persistence.repositories.record_gateway import SQLAlchemyRecordGateway

USER_FILES = {
    "sample_student_list.csv": read_students,
    "sample_staff_list.csv": read_staff,
    "sample_company_representative_list.csv": read_representatives,
}
INTERNSHIP_FILE = "internships.csv"
APPLICATION_FILE = "applications.csv"


async def import_directory(source: Path, database_url: str = None):
    """Upsert every record found in source into the database"""

    engine = create_engine(database_url)
    gateway = SQLAlchemyRecordGateway(create_session_factory(engine))

    await init_db(engine)

    try:
        users = 0
        for filename, reader in USER_FILES.items():
            path = source / filename
            if not path.exists():
                logger.warning(f"Skipping {path}: not found")
                continue
            for user in reader(path):
                await gateway.save_user(user)
                users += 1

        internships = []
        if (source / INTERNSHIP_FILE).exists():
            internships = read_internships(source / INTERNSHIP_FILE)
            for internship in internships:
                await gateway.save_internship(internship)

        applications = []
        if (source / APPLICATION_FILE).exists():
            applications = read_applications(source / APPLICATION_FILE)
            for application in applications:
                await gateway.save_application(application)

        logger.info(
            f"Imported {users} users, {len(internships)} internships and "
            f"{len(applications)} applications from {source}"
        )
    finally:
        await close_db(engine)


def main():
    parser = argparse.ArgumentParser(description="Import legacy CSV files")
    parser.add_argument("source", type=Path, help="Directory holding the CSV files")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args()

    configure_logging(to_file=False)
    asyncio.run(import_directory(args.source, args.database_url))


if __name__ == "__main__":
    main()
