"""
Schémas Pydantic pour les notifications.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    title: str
    message: str
    is_read: bool
    related_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
