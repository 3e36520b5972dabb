"""Human-readable formatting for durations, sizes and bitrates."""

from __future__ import annotations

_DECIMAL_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS.cc, truncating (never rounding).

    Args:
        seconds: Duration in seconds. Negative values are treated as 0.

    Returns:
        Formatted string, e.g. "00:00:59.99" for 59.999. Hours are not
        capped at 24.
    """
    total_centisecs = int(max(seconds, 0.0) * 100)
    hours, remainder = divmod(total_centisecs, 360_000)
    minutes, remainder = divmod(remainder, 6_000)
    secs, centisecs = divmod(remainder, 100)
    return f"{hours:02}:{minutes:02}:{secs:02}.{centisecs:02}"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count with decimal (SI) prefixes.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted string, e.g. "1.50 GB", "999 B".
    """
    if size_bytes < 1000:
        return f"{size_bytes} B"

    value = float(size_bytes)
    for unit in _DECIMAL_UNITS[1:]:
        value /= 1000.0
        if value < 1000.0 or unit == _DECIMAL_UNITS[-1]:
            return f"{value:.2f} {unit}"
    return f"{value:.2f} {_DECIMAL_UNITS[-1]}"


def format_bitrate(bits_per_second: int) -> str:
    """Format a bitrate in Mbps (e.g. "8.5 Mbps")."""
    return f"{bits_per_second / 1_000_000:.1f} Mbps"
