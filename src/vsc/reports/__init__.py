"""Report rendering and the persisted conversion report."""

from vsc.reports.conversion_report import (
    REPORT_FILENAME,
    render_conversion_report,
    write_conversion_report,
)
from vsc.reports.formatters import (
    format_batch_report,
    format_compliance_result,
    format_compliance_summary,
    format_metadata,
    format_plan,
    format_processing_summary,
    metadata_to_dict,
    result_to_dict,
)

__all__ = [
    "REPORT_FILENAME",
    "format_batch_report",
    "format_compliance_result",
    "format_compliance_summary",
    "format_metadata",
    "format_plan",
    "format_processing_summary",
    "metadata_to_dict",
    "render_conversion_report",
    "result_to_dict",
    "write_conversion_report",
]
