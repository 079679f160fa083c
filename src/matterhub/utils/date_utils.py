from whenever import Instant, OffsetDateTime, ZonedDateTime


def convert_utc_timestamp_to_system_tz(timestamp: int | float) -> ZonedDateTime:
    """Convert a UTC timestamp to a ZonedDateTime in the system timezone."""
    return Instant.from_timestamp(timestamp).to_system_tz()


def convert_datetime_str_to_system_tz(value: str | None) -> ZonedDateTime | None:
    """Convert an ISO 8601 string with an offset (as Home Assistant sends them) to the system timezone."""
    if value is None:
        return None
    return OffsetDateTime.parse_iso(value).to_system_tz()
