# app/models/legal_document.py
from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base

DOCUMENT_STATUSES = ("Draft", "Active", "Inactive", "Archived")


class LegalDocumentMixin:
    """Columns shared by every versioned legal document table."""

    id = Column(Integer, primary_key=True, index=True)

    # Document body
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    version = Column(String(50), nullable=False)
    language = Column(String(10), nullable=False, default="en", index=True)

    # Lifecycle
    status = Column(String(20), nullable=False, default="Draft", index=True)
    effective_date = Column(Date, nullable=True)

    # Audit
    created_by = Column(String(100), nullable=False, default="admin")
    updated_by = Column(String(100), nullable=False, default="admin")

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return (
            f"<{type(self).__name__}(id={self.id}, version='{self.version}', "
            f"status='{self.status}')>"
        )


class TermsCondition(LegalDocumentMixin, Base):
    __tablename__ = "terms_conditions"


class PrivacyPolicy(LegalDocumentMixin, Base):
    __tablename__ = "privacy_policies"
