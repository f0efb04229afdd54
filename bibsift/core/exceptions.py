"""Exception classes shared across bibsift."""


class BibsiftError(Exception):
    """Base exception for all bibsift errors."""

    pass


class ConfigurationError(BibsiftError, ValueError):
    """Raised when caller-provided criteria cannot be used as given."""

    pass


class ReductionError(ConfigurationError):
    """Raised when a non-empty string reduces to an empty lookup key."""

    def __init__(self, value: str):
        """Initialize with the offending value."""
        self.value = value
        super().__init__(f'Reducing "{value}" results in an empty string')


class InvalidHashError(ConfigurationError):
    """Raised when a string is not a valid record hash."""

    def __init__(self, value: str, details: str = ""):
        """Initialize with the offending value and optional details."""
        self.value = value
        message = f"Invalid record hash: {value!r}"
        if details:
            message += f" ({details})"
        super().__init__(message)


class QueryCompileError(ConfigurationError):
    """Raised when a search term or regular expression cannot be compiled."""

    def __init__(self, query: str, details: str):
        """Initialize with the query text and the reason."""
        self.query = query
        super().__init__(f"Invalid search query {query!r}: {details}")


class FilterError(ConfigurationError):
    """Raised when an author or publication filter cannot match anything."""

    def __init__(self, kind: str, value: str):
        """Initialize with filter kind (author/publication) and value."""
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind} name: {value}")


class YearRangeError(ConfigurationError):
    """Raised when a search year range is inverted."""

    def __init__(self, start: int, end: int):
        """Initialize with the requested range."""
        self.start = start
        self.end = end
        super().__init__(f"Start year ({start}) must be <= end year ({end})")


class IndexBuildError(BibsiftError):
    """Raised when the project index cannot be built."""

    pass


class HashCollisionError(IndexBuildError):
    """Raised when two distinct entries share a record hash."""

    def __init__(self, hash_value: str, first: str, second: str):
        """Initialize with the shared hash and both record descriptions."""
        self.hash_value = hash_value
        super().__init__(
            f"Records share hash {hash_value}: {first} and {second}. "
            "Remove the duplicate from the project file."
        )


class ResolutionError(BibsiftError):
    """Raised when an entry specifier matches no record."""

    def __init__(self, specifier: str):
        """Initialize with the specifier description."""
        self.specifier = specifier
        super().__init__(f"Could not locate a record matching: {specifier}")


class ProjectError(BibsiftError):
    """Raised when a project file or its data directory is unusable."""

    pass


class RecordImportError(BibsiftError):
    """Raised when records cannot be imported from an export file."""

    pass


class TextFileError(BibsiftError):
    """Raised when a converted text file cannot be read during a search."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with the unreadable path."""
        self.path = path
        message = f"Failed to read converted text {path}"
        if details:
            message += f": {details}"
        super().__init__(message)


class ConversionError(BibsiftError):
    """Raised when a PDF cannot be converted to minified text."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with the PDF path and the failure reason."""
        self.path = path
        message = f"Failed to convert {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
