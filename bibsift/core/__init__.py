"""Core domain models and primitives for the record library."""

from bibsift.core.diagnostics import DiagnosticsSink
from bibsift.core.exceptions import (
    BibsiftError,
    ConfigurationError,
    ConversionError,
    FilterError,
    HashCollisionError,
    IndexBuildError,
    InvalidHashError,
    ProjectError,
    QueryCompileError,
    RecordImportError,
    ReductionError,
    ResolutionError,
    TextFileError,
    YearRangeError,
)
from bibsift.core.hashing import RecordHash, compute_record_hash
from bibsift.core.models import MAX_YEAR, ProjectEntry, Record
from bibsift.core.strings import ReducedStr, reduce

__all__ = [
    # Models
    "Record",
    "ProjectEntry",
    "MAX_YEAR",
    # Normalization and hashing
    "reduce",
    "ReducedStr",
    "RecordHash",
    "compute_record_hash",
    # Diagnostics
    "DiagnosticsSink",
    # Errors
    "BibsiftError",
    "ConfigurationError",
    "ReductionError",
    "InvalidHashError",
    "QueryCompileError",
    "FilterError",
    "YearRangeError",
    "IndexBuildError",
    "HashCollisionError",
    "ResolutionError",
    "ProjectError",
    "RecordImportError",
    "TextFileError",
    "ConversionError",
]
