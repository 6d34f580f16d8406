"""
Reminder planner tests

Run with: pytest tests/test_reminder_planner.py -v
"""

import pytest
from datetime import date, datetime

from models.filing import ReturnType
from models.reminder import NotificationChannel, ReminderStatus
from notifications.reminder_planner import (
    ReminderPlanner,
    create_reminders_for_month,
    get_overdue_reminders,
    get_pending_reminders_for_today,
    mark_as_sent,
)


class TestCreateReminders:
    """One reminder per unfiled return"""

    def test_nothing_filed(self):
        reminders = create_reminders_for_month("C001", "Acme Traders", "2024-03", "monthly")

        assert [r.return_type for r in reminders] == [ReturnType.GSTR1, ReturnType.GSTR3B]

        gstr1, gstr3b = reminders
        assert gstr1.due_date == "2024-04-11"
        assert gstr1.reminder_date == "2024-04-06"
        assert gstr3b.due_date == "2024-04-20"
        assert gstr3b.reminder_date == "2024-04-15"
        assert gstr3b.status == ReminderStatus.PENDING
        assert gstr3b.client_name == "Acme Traders"

    def test_gstr1_already_filed(self):
        reminders = create_reminders_for_month("C001", "Acme", "2024-03", "monthly", gstr1_filed=True)

        assert len(reminders) == 1
        assert reminders[0].return_type == ReturnType.GSTR3B

    def test_everything_filed(self):
        reminders = create_reminders_for_month(
            "C001", "Acme", "2024-03", "monthly", gstr1_filed=True, gstr3b_filed=True
        )
        assert reminders == []

    def test_quarterly_uses_turnover_tier(self):
        reminders = create_reminders_for_month(
            "C002", "Shree Foods", "2024-06", "quarterly", gstr1_filed=True, turnover=60_000_000
        )

        assert reminders[0].due_date == "2024-07-22"
        assert reminders[0].reminder_date == "2024-07-17"

    def test_default_and_custom_channels(self):
        default = create_reminders_for_month("C001", "Acme", "2024-03", "monthly")[0]
        custom = create_reminders_for_month(
            "C001", "Acme", "2024-03", "monthly", channels=[NotificationChannel.SMS]
        )[0]

        assert default.notification_channels == [NotificationChannel.EMAIL, NotificationChannel.DASHBOARD]
        assert custom.notification_channels == [NotificationChannel.SMS]

    def test_reminder_key(self):
        reminder = create_reminders_for_month("C001", "Acme", "2024-03", "monthly")[1]
        assert reminder.key == "C001:2024-03:GSTR-3B"

    def test_configured_lead_days(self):
        planner = ReminderPlanner({'reminders': {'lead_days': 3}})

        reminders = planner.create_reminders_for_month("C001", "Acme", "2024-03", "monthly")

        assert reminders[1].reminder_date == "2024-04-17"


class TestReminderQueries:
    """Which reminders are due today and which are overdue"""

    @pytest.fixture
    def reminders(self):
        return create_reminders_for_month("C001", "Acme", "2024-03", "monthly")

    def test_pending_for_today(self, reminders):
        due_today = get_pending_reminders_for_today(reminders, today=date(2024, 4, 15))

        assert [r.return_type for r in due_today] == [ReturnType.GSTR3B]

    def test_nothing_pending_today(self, reminders):
        assert get_pending_reminders_for_today(reminders, today="2024-04-14") == []

    def test_sent_reminders_not_pending(self, reminders):
        sent = [mark_as_sent(r, datetime(2024, 4, 15, 9, 0)) for r in reminders]

        assert get_pending_reminders_for_today(sent, today=date(2024, 4, 15)) == []
        assert sent[1].status == ReminderStatus.SENT
        assert sent[1].sent_at == datetime(2024, 4, 15, 9, 0)
        # original untouched
        assert reminders[1].status == ReminderStatus.PENDING

    def test_overdue(self, reminders):
        overdue = get_overdue_reminders(reminders, today=date(2024, 4, 12))
        assert [r.return_type for r in overdue] == [ReturnType.GSTR1]

        overdue = get_overdue_reminders(reminders, today=date(2024, 4, 21))
        assert len(overdue) == 2

    def test_on_due_date_not_overdue(self, reminders):
        assert get_overdue_reminders(reminders, today=date(2024, 4, 11)) == []

    def test_sent_reminders_not_overdue(self, reminders):
        sent = [mark_as_sent(r) for r in reminders]
        assert get_overdue_reminders(sent, today=date(2024, 5, 1)) == []

    def test_mark_overdue(self, reminders):
        planner = ReminderPlanner()

        marked = planner.mark_overdue(reminders, today=date(2024, 4, 12))

        assert len(marked) == 1
        assert marked[0].status == ReminderStatus.OVERDUE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
