"""Process exit codes shared by CLI commands."""

SUCCESS_EXIT_CODE = 0
VALIDATION_EXIT_CODE = 10
STORAGE_EXIT_CODE = 40
SYSTEM_EXIT_CODE = 50

__all__ = ["SUCCESS_EXIT_CODE", "VALIDATION_EXIT_CODE", "STORAGE_EXIT_CODE", "SYSTEM_EXIT_CODE"]
