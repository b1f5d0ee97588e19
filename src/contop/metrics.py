"""Pure metric derivation helpers."""

UNITS = ("B", "KB", "MB", "GB")


def derive_cpu_percent(
    previous_cpu_total: int,
    current_cpu_total: int,
    previous_system_total: int,
    current_system_total: int,
) -> float:
    """
    Derive CPU utilization from two successive counter snapshots.

    Returns 0.0 when no system time elapsed between the snapshots. A runtime
    counter reset can yield a transient negative or >100 value.
    """
    cpu_delta = current_cpu_total - previous_cpu_total
    system_delta = current_system_total - previous_system_total
    if system_delta > 0:
        return (cpu_delta / system_delta) * 100.0
    return 0.0


def format_byte_size(size: int) -> str:
    """Format bytes as a human-readable string, e.g. ``2.00 MB``."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {UNITS[unit_index]}"


def memory_percent(usage: int, limit: int) -> float:
    """Memory usage as a percentage of limit."""
    return (usage / limit) * 100.0
