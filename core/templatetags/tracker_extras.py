from django import template
from django.template.defaultfilters import floatformat

register = template.Library()

STATUS_CSS = {
    "Applying": "status-applying",
    "Waiting": "status-waiting",
    "Accepted": "status-accepted",
    "Waitlisted": "status-waitlisted",
    "Rejected": "status-rejected",
}


@register.filter
def status_css(status):
    return STATUS_CSS.get(str(status), "status-unknown")


@register.filter
def money(value):
    """75 -> '$75.00'"""
    try:
        return f"${float(value):,.2f}"
    except (TypeError, ValueError):
        return "$0.00"


@register.filter
def pct(value, places: int = 1):
    """Format a percentage number, dropping a trailing '.0'."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        return "0%"
    # negative precision: decimals only when the value has any
    return f"{floatformat(num, -int(places))}%"
