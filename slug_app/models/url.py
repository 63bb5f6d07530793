from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from slug_app.database.connection import Base
from slug_app.utils import utcnow


class ShortenedUrl(Base):
    """
    A slug and the original URL it points to.

    Neither slug nor original_url has an update path once the row exists.
    """
    __tablename__ = "urls"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True is the uniqueness guarantee concurrent creates rely on
    slug = Column(String(32), unique=True, nullable=False, index=True)
    original_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    analytic = relationship(
        "VisitAnalytics",
        back_populates="url",
        uselist=False,
        cascade="all, delete-orphan",
    )
