# app/models/upload.py
from sqlalchemy import BigInteger, Column, DateTime, String, Text
from sqlalchemy.sql import func

from app.core.database import Base, JSONType


class Upload(Base):
    __tablename__ = "uploads"

    # Opaque uuid string
    id = Column(String(36), primary_key=True)

    # File Info
    filename = Column(String(255), nullable=False, index=True)
    original_name = Column(String(255), nullable=False)
    file_path = Column(Text, nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String(100), nullable=False)

    # Classification: image, video, document, thumbnail
    upload_type = Column(String(20), nullable=False, default="general", index=True)
    category = Column(String(100), nullable=False, default="uncategorized")

    # "metadata" is reserved on declarative classes
    file_metadata = Column("metadata", JSONType, nullable=False, default=dict)

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
        return f"<Upload(id='{self.id}', filename='{self.filename}', type='{self.upload_type}')>"
