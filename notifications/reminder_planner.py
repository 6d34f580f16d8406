"""
Reminder Planner
Works out which due-date reminders exist for a period and when they fall

Only planning happens here; delivery belongs to the notification transport.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union

from loguru import logger

from calculators.due_date_calculator import DueDateCalculator
from models.filing import FilingFrequency, ReturnType
from models.reminder import NotificationChannel, Reminder, ReminderStatus
from utils.config import get_section
from utils.dates import DateLike, format_date, resolve_today, to_date


class ReminderPlanner:
    """Plans GSTR-1 / GSTR-3B reminders for unfiled returns"""

    def __init__(self, config: dict = None):
        self.config = config or {}
        reminders = get_section(self.config, 'reminders')
        self.lead_days = reminders['lead_days']
        self.default_channels = [NotificationChannel(c) for c in reminders['channels']]
        self.due_date_calculator = DueDateCalculator(self.config)

    def create_reminder(
        self,
        client_id: str,
        client_name: str,
        month: str,
        return_type: ReturnType,
        due_date: str,
        channels: Optional[List[NotificationChannel]] = None,
    ) -> Reminder:
        reminder_date = to_date(due_date) - timedelta(days=self.lead_days)
        return Reminder(
            client_id=client_id,
            client_name=client_name,
            month=month,
            return_type=return_type,
            due_date=due_date,
            reminder_date=format_date(reminder_date),
            notification_channels=list(channels or self.default_channels),
        )

    def create_reminders_for_month(
        self,
        client_id: str,
        client_name: str,
        month: str,
        filing_frequency: Union[FilingFrequency, str],
        gstr1_filed: bool = False,
        gstr3b_filed: bool = False,
        turnover: Optional[float] = None,
        channels: Optional[List[NotificationChannel]] = None,
    ) -> List[Reminder]:
        """Create reminders for every return of the period not yet filed"""
        due_dates = self.due_date_calculator.calculate(month, filing_frequency, turnover)
        reminders = []

        if not gstr1_filed:
            reminders.append(self.create_reminder(
                client_id, client_name, month, ReturnType.GSTR1, due_dates.gstr1_due_date, channels
            ))

        if not gstr3b_filed:
            if due_dates.gstr3b_is_advisory:
                logger.warning(
                    f"GSTR-3B reminder for {client_id} {month} uses a placeholder due date "
                    f"(interim QRMP month)"
                )
            reminders.append(self.create_reminder(
                client_id, client_name, month, ReturnType.GSTR3B, due_dates.gstr3b_due_date, channels
            ))

        logger.debug(f"Planned {len(reminders)} reminder(s) for {client_id} {month}")
        return reminders

    def get_pending_reminders_for_today(
        self,
        reminders: Iterable[Reminder],
        today: Optional[DateLike] = None,
    ) -> List[Reminder]:
        """Get pending reminders that need to be sent today"""
        today_str = format_date(resolve_today(today))
        return [
            r for r in reminders
            if r.status == ReminderStatus.PENDING and r.reminder_date == today_str
        ]

    def get_overdue_reminders(
        self,
        reminders: Iterable[Reminder],
        today: Optional[DateLike] = None,
    ) -> List[Reminder]:
        """Get reminders whose return is past due and was never notified"""
        current = resolve_today(today)
        return [
            r for r in reminders
            if r.status != ReminderStatus.SENT and current > to_date(r.due_date)
        ]

    def mark_as_sent(self, reminder: Reminder, sent_at: Optional[datetime] = None) -> Reminder:
        return reminder.model_copy(update={
            'status': ReminderStatus.SENT,
            'sent_at': sent_at or datetime.now(),
        })

    def mark_overdue(self, reminders: Iterable[Reminder], today: Optional[DateLike] = None) -> List[Reminder]:
        """Copies of the overdue reminders with their status set to OVERDUE"""
        return [
            r.model_copy(update={'status': ReminderStatus.OVERDUE})
            for r in self.get_overdue_reminders(reminders, today)
        ]


_default_planner = ReminderPlanner()


def create_reminders_for_month(
    client_id: str,
    client_name: str,
    month: str,
    filing_frequency: Union[FilingFrequency, str],
    gstr1_filed: bool = False,
    gstr3b_filed: bool = False,
    turnover: Optional[float] = None,
    channels: Optional[List[NotificationChannel]] = None,
) -> List[Reminder]:
    return _default_planner.create_reminders_for_month(
        client_id, client_name, month, filing_frequency,
        gstr1_filed, gstr3b_filed, turnover, channels,
    )


def get_pending_reminders_for_today(reminders: Iterable[Reminder], today: Optional[DateLike] = None) -> List[Reminder]:
    return _default_planner.get_pending_reminders_for_today(reminders, today)


def get_overdue_reminders(reminders: Iterable[Reminder], today: Optional[DateLike] = None) -> List[Reminder]:
    return _default_planner.get_overdue_reminders(reminders, today)


def mark_as_sent(reminder: Reminder, sent_at: Optional[datetime] = None) -> Reminder:
    return _default_planner.mark_as_sent(reminder, sent_at)
