# app/models/subcategory.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base


class Subcategory(Base):
    __tablename__ = "subcategories"
    __table_args__ = (
        CheckConstraint(
            "status IN ('Active', 'Inactive', 'Draft')", name="ck_subcategories_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Basic Info
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False, default="Subcategory description")
    status = Column(String(20), nullable=False, default="Active", server_default="Active")

    # Parent category (deletion guarded in CategoryService)
    category_id = Column(
        Integer, ForeignKey("categories.id"), nullable=False, index=True
    )

    # Number of topics filed under this subcategory (see counters.py)
    topics_count = Column(Integer, nullable=False, default=0, server_default="0")

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

    @property
    def category_name(self):
        return self.category.name if self.category else None

    def __repr__(self):
        return f"<Subcategory(id={self.id}, name='{self.name}', category_id={self.category_id})>"
