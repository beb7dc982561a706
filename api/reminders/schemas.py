"""
Reminder request models.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class ReminderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, max_length=255)
    # Free-form clock text, e.g. "08:30" or "08:30 AM".
    time: str | None = Field(default=None, max_length=20)
    date: dt.date | None = None
    notes: str | None = Field(default=None, max_length=2000)
    am_pm: str | None = Field(default=None, alias="amPm", max_length=2)
    is_active: bool | None = Field(default=None, alias="isActive")
    next_reminder: bool | None = Field(default=None, alias="nextReminder")
    reminder_in: int | str | None = Field(default=None, alias="reminderIn")


class DeleteRemindersRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reminder_id: int | str | None = Field(default=None, alias="reminderId")
    reminder_ids: list[int | str] | None = Field(default=None, alias="reminderIds")
