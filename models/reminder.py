"""
Filing reminder models
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum

from models.filing import ReturnType


class ReminderStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    OVERDUE = "overdue"


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    DASHBOARD = "dashboard"


class Reminder(BaseModel):
    """A planned due-date reminder for one return of one period"""
    client_id: str
    client_name: str = ""
    month: str
    return_type: ReturnType
    due_date: str
    reminder_date: str
    status: ReminderStatus = ReminderStatus.PENDING
    notification_channels: List[NotificationChannel] = Field(
        default_factory=lambda: [NotificationChannel.EMAIL, NotificationChannel.DASHBOARD]
    )
    sent_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        """Stable identity: one reminder per client, period and return"""
        return f"{self.client_id}:{self.month}:{self.return_type.value}"
