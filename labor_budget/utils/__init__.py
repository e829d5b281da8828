"""Shared utilities."""

from labor_budget.utils.logging_utils import LogContext, log_function_call

__all__ = ["LogContext", "log_function_call"]
