"""Late-edit gate for completion records."""

from datetime import date
from typing import Optional

from ..models.scores import EditEligibility
from ..utils.datetime_utils import DateLike, as_date

# Days before today that may still be logged (flagged as late)
LATE_LOG_GRACE_DAYS = 1


def can_edit_date(
    target: DateLike,
    today: Optional[DateLike] = None,
    grace_days: int = LATE_LOG_GRACE_DAYS,
) -> EditEligibility:
    """Whether a completion for ``target`` may be edited, and if it is late."""
    target_day = as_date(target)
    current = as_date(today) if today is not None else date.today()

    if target_day > current:
        return EditEligibility(can_edit=False, is_late_log=False)

    if target_day == current:
        return EditEligibility(can_edit=True, is_late_log=False)

    if (current - target_day).days <= grace_days:
        return EditEligibility(can_edit=True, is_late_log=True)

    return EditEligibility(can_edit=False, is_late_log=False)
