"""Map request times onto the NBM 1D archive's model run schedule."""

from datetime import datetime, timedelta, timezone

# The archive only keeps the 01, 07, 13 and 19 UTC runs
RUN_HOURS = (19, 13, 7, 1)


def calculate_initialization_time(request_time: datetime) -> datetime:
    """Find the most recent model initialization time at or before a request time.

    Requests before 01 UTC fall back to the 19 UTC run of the previous day.
    Timezone-aware times are converted to naive UTC first.

    Args:
        request_time: Wall-clock time of the request (UTC).

    Returns:
        Naive UTC datetime on the hour of the selected run.
    """
    if request_time.tzinfo is not None:
        request_time = request_time.astimezone(timezone.utc).replace(tzinfo=None)

    top_of_hour = request_time.replace(minute=0, second=0, microsecond=0)
    hour = top_of_hour.hour

    for run_hour in RUN_HOURS:
        if hour >= run_hour:
            return top_of_hour - timedelta(hours=hour - run_hour)

    return top_of_hour - timedelta(hours=hour + 24 - RUN_HOURS[0])
