"""Domain models for the SSR spreadsheet importer."""

from .config_models import DatabaseConfig, ImportConfig
from .error_record import ErrorRecord
from .import_run import ImportRun
from .processing_result import ProcessingResult
from .schedule import RateItem, Section, SubSection, rate_type_of

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    # Schedule tree
    "Section",
    "SubSection",
    "RateItem",
    "rate_type_of",
    # Run models
    "ImportRun",
    "ProcessingResult",
    "ErrorRecord",
]
