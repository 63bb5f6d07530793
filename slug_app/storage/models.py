"""
Value objects exchanged with the URL store.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from slug_app.utils import utcnow


class UrlRecord(BaseModel):
    """
    A shortened URL joined with its visit analytics.

    Stores hand out copies of this model, never live ORM rows, so a record
    can be passed around freely after its session is closed.
    """

    slug: str = Field(..., description="Unique slug used as lookup key")
    original_url: str = Field(..., description="Absolute URL the slug resolves to")
    created_at: datetime = Field(default_factory=utcnow, description="When the slug was created")

    # Analytics
    visits: int = Field(0, ge=0, description="Number of successful resolutions")
    last_visit_at: Optional[datetime] = Field(None, description="Time of the latest visit")

    model_config = ConfigDict(from_attributes=True)
