"""External tool and hardware checks."""

from vsc.tools.hardware import check_hardware_support

__all__ = ["check_hardware_support"]
