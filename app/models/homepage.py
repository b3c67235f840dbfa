"""
Homepage content, one row per language with one hero/about/contact section
each and an ordered list of FAQs.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from app.core.database import Base, JSONType


class Homepage(Base):
    __tablename__ = "homepages"

    id = Column(Integer, primary_key=True, index=True)
    language = Column(String(10), nullable=False, unique=True, index=True)
    version = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)

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
        return f"<Homepage(id={self.id}, language='{self.language}', version={self.version})>"


class HomepageHero(Base):
    __tablename__ = "homepage_heroes"

    id = Column(Integer, primary_key=True, index=True)
    homepage_id = Column(
        Integer,
        ForeignKey("homepages.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    title = Column(String(255), nullable=False)
    subtitle = Column(Text, nullable=False)
    background_image = Column(Text, nullable=True)
    cta_text = Column(String(100), nullable=True)
    cta_link = Column(Text, nullable=True)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class HomepageAbout(Base):
    __tablename__ = "homepage_abouts"

    id = Column(Integer, primary_key=True, index=True)
    homepage_id = Column(
        Integer,
        ForeignKey("homepages.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(Text, nullable=True)
    features = Column(JSONType, nullable=False, default=list)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class HomepageContact(Base):
    __tablename__ = "homepage_contacts"

    id = Column(Integer, primary_key=True, index=True)
    homepage_id = Column(
        Integer,
        ForeignKey("homepages.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    hours = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    support_email = Column(String(255), nullable=True)
    sales_email = Column(String(255), nullable=True)
    social_links = Column(JSONType, nullable=False, default=dict)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class HomepageFaq(Base):
    __tablename__ = "homepage_faqs"

    id = Column(Integer, primary_key=True, index=True)
    homepage_id = Column(
        Integer,
        ForeignKey("homepages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    order_index = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
