from datetime import datetime, timedelta, timezone

from app.core import schedular
from app.core.init import initialize_application
from app.models.homepage import Homepage
from app.models.otp_verification import OtpVerification
from app.models.user import User


def test_initialize_seeds_default_homepage_once(db_session):
    initialize_application(db_session)
    initialize_application(db_session)

    homepages = db_session.query(Homepage).all()
    assert [h.language for h in homepages] == ["en"]
    assert homepages[0].hero.title


def test_seeded_homepage_is_served(client, db_session):
    initialize_application(db_session)

    response = client.get("/api/homepage/en")
    assert response.status_code == 200
    assert response.json()["data"]["version"] == 1


def test_scheduled_cleanup_removes_expired_codes(db_session):
    user = User(email="ada@example.com", is_verified=False)
    db_session.add(user)
    db_session.flush()
    now = datetime.now(timezone.utc)
    db_session.add_all(
        [
            OtpVerification(user_id=user.id, otp_hash="x", expires_at=now - timedelta(minutes=5)),
            OtpVerification(user_id=user.id, otp_hash="y", expires_at=now + timedelta(minutes=5)),
        ]
    )
    db_session.commit()

    schedular.cleanup_expired_otps()

    db_session.expire_all()
    assert [row.otp_hash for row in db_session.query(OtpVerification)] == ["y"]
