import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.database import SessionLocal
from app.services.auth import auth_service

logger = logging.getLogger(__name__)


def cleanup_expired_otps():
    """
    Scheduled task to delete OTP codes past their expiry.
    Runs every hour.
    """
    db = SessionLocal()
    try:
        deleted_count = auth_service.purge_expired_otps(db)
        logger.info(
            f"[{datetime.now(timezone.utc)}] OTP cleanup completed. "
            f"Deleted {deleted_count} expired codes."
        )
    except Exception as e:
        logger.error(f"Error during OTP cleanup: {e}")
    finally:
        db.close()


def start_scheduler():
    """
    Initialize and start the APScheduler for OTP cleanup.
    """
    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        cleanup_expired_otps,
        trigger=IntervalTrigger(hours=1),
        id="hourly_otp_cleanup",
        name="Delete expired OTP codes",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("OTP cleanup scheduler started. Hourly cleanup scheduled.")

    return scheduler


def shutdown_scheduler(scheduler: AsyncIOScheduler):
    """
    Gracefully shutdown the scheduler.
    """
    if scheduler:
        scheduler.shutdown()
        logger.info("OTP cleanup scheduler shut down.")
