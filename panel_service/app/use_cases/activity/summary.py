"""
HTML summary of a single activity record.

Pure formatting: the caller resolves the actor and supplies the reference time.
"""

from datetime import datetime
from html import escape
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from sqlmodel import SQLModel

from panel_service.app.services.translator import DEFAULT_LOCALE, trans
from panel_service.domain.base import utcnow
from panel_service.domain.entities import ActivityLog, User

SYSTEM_EMAIL = "system@pelican.dev"
SYSTEM_USERNAME = "system"

_UNITS = (
    ("year", 365 * 86400),
    ("month", 30 * 86400),
    ("week", 7 * 86400),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)

SUMMARY_TEMPLATE = """
<div style='display: flex; align-items: center;'>
    <img width='50px' height='50px' src='{avatar}' style='margin-right: 15px' />

    <div>
        <p>{username} &mdash; {event}</p>
        <p>{description}</p>
        <p>{ip} &mdash; <span title='{absolute}'>{relative}</span></p>
    </div>
</div>
"""


def system_user() -> User:
    """Stand-in actor for records created by the panel itself."""
    return User(email=SYSTEM_EMAIL, username=SYSTEM_USERNAME, password_hash="")


def avatar_url(user: User) -> str:
    query = urlencode({"name": user.username, "color": "FFFFFF", "background": "09090b"})
    return f"https://ui-avatars.com/api/?{query}"


def event_translation_key(event: str) -> str:
    """server:file.upload -> activity.server.file.upload"""
    return "activity." + event.replace(":", ".")


def format_absolute(moment: datetime) -> str:
    """Jan 5, 2024 3:04pm"""
    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return f"{moment.strftime('%b')} {moment.day}, {moment.year} {hour}:{moment.minute:02d}{meridiem}"


def diff_for_humans(moment: datetime, now: datetime) -> str:
    """Relative time such as '3 minutes ago' or '2 days from now'."""
    delta = (now - moment).total_seconds()
    suffix = "ago" if delta >= 0 else "from now"
    seconds = abs(int(delta))

    unit, count = "second", 1
    for name, size in _UNITS:
        if seconds >= size:
            unit, count = name, seconds // size
            break

    plural = "" if count == 1 else "s"
    return f"{count} {unit}{plural} {suffix}"


def _placeholders(properties: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for key, value in (properties or {}).items():
        if isinstance(value, (list, tuple)):
            values[key] = ", ".join(str(item) for item in value)
        elif not isinstance(value, dict):
            values[key] = str(value)
    return values


def render_summary(
    activity: ActivityLog,
    actor: Optional[SQLModel] = None,
    now: Optional[datetime] = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    user = actor if isinstance(actor, User) else system_user()
    now = now or utcnow()

    description = trans(
        event_translation_key(activity.event),
        replace=_placeholders(activity.properties),
        locale=locale,
    )

    return SUMMARY_TEMPLATE.format(
        avatar=escape(avatar_url(user)),
        username=escape(user.username),
        event=escape(activity.event),
        description=escape(description),
        ip=escape(activity.ip),
        absolute=escape(format_absolute(activity.timestamp)),
        relative=escape(diff_for_humans(activity.timestamp, now)),
    )
