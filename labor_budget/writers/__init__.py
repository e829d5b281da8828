"""Output writers for reports and the budget template."""

from labor_budget.writers.file_writer import (
    ReportWriteError,
    budget_template_frame,
    write_budget_template,
    write_frames,
)
from labor_budget.writers.report_generator import ReportGenerator

__all__ = [
    "ReportGenerator",
    "ReportWriteError",
    "budget_template_frame",
    "write_budget_template",
    "write_frames",
]
