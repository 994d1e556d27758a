"""Core exceptions for SQLPager."""

from typing import Any, Dict, Optional


class SQLPagerError(Exception):
    """Base exception for all SQLPager errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SQLPagerError):
    """Raised when configuration or call arguments make a statement impossible to build."""
    pass


class DatabaseError(SQLPagerError):
    """Raised when there's an error connecting to or querying a database."""

    def __init__(
        self,
        message: str,
        database_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.database_type = database_type


class BuilderError(SQLPagerError):
    """Raised by strict-mode builders when input would otherwise be ignored."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.operation = operation


class PaginationError(SQLPagerError):
    """Raised when the count or page statement fails to execute."""

    def __init__(
        self,
        message: str,
        statement: Optional[str] = None,
        dialect: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.statement = statement
        self.dialect = dialect
