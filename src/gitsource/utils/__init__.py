"""Shared utilities for gitsource."""

from gitsource.utils._logging import LogFormatType, create_logger, get_library_logger

__all__ = ["LogFormatType", "create_logger", "get_library_logger"]
