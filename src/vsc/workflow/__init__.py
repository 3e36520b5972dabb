"""Directory scanning and the batch processing workflow."""

from vsc.workflow.discovery import create_output_dir, validate_directory
from vsc.workflow.processor import (
    BatchRunResult,
    DirectoryProcessor,
    FileReport,
    process_single_file,
)

__all__ = [
    "BatchRunResult",
    "DirectoryProcessor",
    "FileReport",
    "create_output_dir",
    "process_single_file",
    "validate_directory",
]
