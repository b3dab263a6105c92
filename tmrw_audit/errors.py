"""Exceptions raised by tmrw-audit."""


class AuditError(Exception):
    """Base class for tmrw-audit errors."""


class CatalogError(AuditError):
    """Raised when the bundled vendor catalog or reference data cannot be loaded."""


class ScanError(AuditError):
    """Raised when file discovery fails or finds nothing to analyze."""


class ReportError(AuditError):
    """Raised when a report cannot be written or read."""
