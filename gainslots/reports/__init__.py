"""Report generation for gainslots."""

from gainslots.reports.ledger_export import LedgerExporter
from gainslots.reports.validation_report import ValidationReportGenerator

__all__ = [
    "LedgerExporter",
    "ValidationReportGenerator",
]
