"""Formatting helpers for console reports."""

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def human_bytes(n: int) -> str:
    """Format a byte count in binary units (KiB, MiB, ...).

    Values under 1024 are shown as plain bytes. Above that, precision shrinks
    as the number grows: two decimals below 10, one below 100, none above.

    Args:
        n: Number of bytes

    Returns:
        Formatted size such as "999 B", "1.00 KiB" or "10.0 MiB"
    """
    if n < 1024:
        return f"{n} B"

    size = float(n)
    unit = 0
    while size >= 1024.0 and unit < len(_UNITS) - 1:
        size /= 1024.0
        unit += 1

    if size >= 100.0:
        return f"{size:.0f} {_UNITS[unit]}"
    if size >= 10.0:
        return f"{size:.1f} {_UNITS[unit]}"
    return f"{size:.2f} {_UNITS[unit]}"
