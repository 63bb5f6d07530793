from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from slug_app.database.connection import Base


class VisitAnalytics(Base):
    """Visit counter and last visit time, one row per ShortenedUrl"""
    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url_id = Column(
        Integer,
        ForeignKey("urls.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    visits = Column(Integer, nullable=False, default=0)
    last_visit_at = Column(DateTime(timezone=True), nullable=True)

    url = relationship("ShortenedUrl", back_populates="analytic")
