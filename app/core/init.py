"""
Application initialization module
Handles initial setup tasks like creating tables and seeding the default homepage
"""

import logging

from sqlalchemy.orm import Session

from app.core.database import Base, engine
from app.services.homepage import HomepageService

logger = logging.getLogger(__name__)


def init_tables() -> None:
    """Create any missing tables. Alembic owns schema changes in production."""
    # Registers every model on Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_default_homepage(db: Session) -> None:
    """
    Seed placeholder English homepage content when no homepage exists.

    Args:
        db: Database session
    """
    try:
        homepage = HomepageService(db).ensure_default("en")
    except Exception as e:
        logger.error(f"❌ Failed to seed default homepage: {e}")
        db.rollback()
        raise

    if homepage:
        logger.info("🏠 Default homepage content created for 'en'")
    else:
        logger.info("✅ Homepage content already exists")


def initialize_application(db: Session) -> None:
    """
    Run all application initialization tasks.

    Args:
        db: Database session
    """
    logger.info("🚀 Starting application initialization...")

    init_tables()
    init_default_homepage(db)

    logger.info("✅ Application initialization completed!")
