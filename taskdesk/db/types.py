"""Column types shared by the table models."""
from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from taskdesk.utils.timeutil import to_utc


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime column.

    Values are converted to UTC on the way in. SQLite keeps no offset, so
    values read back without tzinfo are marked as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return to_utc(value)

    def process_result_value(self, value, dialect):
        return to_utc(value)
