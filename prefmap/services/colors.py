"""
colors.py — Severity → fill color policy.

Severities 0–7 are the validated range. 8 and 9 get two extra colors so a
render never fails if an unvalidated value slips through (e.g. with strict
scale validation switched off); anything else falls back to the
severity-0 color.
"""

_SEVERITY_COLORS = {
    0: "#27272a",
    1: "#bae6fd",
    2: "#4ade80",
    3: "#facc15",
    4: "#f97316",
    5: "#dc2626",
    6: "#86198f",
    7: "#500724",
    # Out of the validated range
    8: "#4a044e",
    9: "#b91c1c",
}

DEFAULT_COLOR = _SEVERITY_COLORS[0]


def severity_to_color(severity: int) -> str:
    """Return the hex fill color for *severity*. Never raises."""
    return _SEVERITY_COLORS.get(severity, DEFAULT_COLOR)
