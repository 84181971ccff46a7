"""Document payload type and timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

BUFFER_FIELD = "_"


def isoformat(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string. Returns None for missing or malformed values."""
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_newer(candidate: Any, reference: Any) -> bool:
    """True if timestamp `candidate` is strictly later than `reference`.

    An unparseable timestamp on either side is never newer.
    """
    a = parse_timestamp(candidate)
    b = parse_timestamp(reference)
    if a is None or b is None:
        return False
    return a > b


class Document(dict):
    """A document payload: an ordered map of arbitrary fields.

    Unknown fields are kept as-is; the well-known ones get accessors.
    """

    @property
    def title(self) -> str:
        return self.get("title", "")

    @property
    def content(self) -> str:
        return self.get("content", "")

    @property
    def created_at(self) -> str | None:
        return self.get("createdAt")

    @property
    def updated_at(self) -> str | None:
        return self.get("updatedAt")

    @property
    def in_buffer(self) -> bool:
        state = self.get(BUFFER_FIELD)
        return bool(state.get("inBuffer")) if isinstance(state, dict) else False

    def without_buffer_state(self) -> Document:
        """Copy of the payload with the local-only buffer flag removed."""
        return Document((k, v) for k, v in self.items() if k != BUFFER_FIELD)

    def with_buffer_state(self, in_buffer: bool) -> Document:
        doc = self.without_buffer_state()
        doc[BUFFER_FIELD] = {"inBuffer": in_buffer}
        return doc
