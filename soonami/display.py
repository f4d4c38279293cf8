from soonami import glyphs
from soonami.data import quake
from soonami.util import wtime

ALERT_NO = "no tsunami alert"
ALERT_YES = "tsunami alert issued"
ALERT_NOT_AVAILABLE = "tsunami alert not available"


def tsunami_alert_string(code: int) -> str:
    if code == 0:
        return ALERT_NO
    elif code == 1:
        return ALERT_YES

    return ALERT_NOT_AVAILABLE


def render_lines(result: quake.QuakeResult) -> list[str]:
    """
    Return the title, date and tsunami alert lines. Title and date stay
    blank when there is no data.
    """
    if isinstance(result, quake.Found):
        record = result.record
        return [
            record.title,
            wtime.format_event_time(time_ms=record.time_ms),
            tsunami_alert_string(code=record.tsunami),
        ]

    return ["", "", tsunami_alert_string(code=result.record.tsunami)]


def render_output(result: quake.QuakeResult) -> tuple[str, str, str]:
    text: str = ""
    output_class: str = ""
    tooltip: str = ""

    title, date, alert = render_lines(result=result)
    if isinstance(result, quake.Found):
        icon = glyphs.md_alert if result.record.tsunami == 1 else ""
        text = f"{icon}{glyphs.icon_spacer}{title}" if icon else title
        output_class = "success"
        tooltip = "\n".join(
            [title, date, alert, "", f"Last updated {wtime.get_human_timestamp()}"]
        )
    else:
        text = f"{glyphs.md_alert}{glyphs.icon_spacer}{alert}"
        output_class = "error"
        tooltip = f"Earthquake data not available: {result.reason or 'unknown error'}"

    return text, output_class, tooltip
