"""
Custom exceptions for site data loading with user-friendly error messages.
"""


class SiteDataError(Exception):
    """Base exception for site data errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class DataFileNotFoundError(SiteDataError):
    """Raised when one of the JSON data files is missing."""
    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Data file not found: {path}",
            f"❌ Data file '{path}' was not found. Check the data directory setting."
        )


class DataFileFormatError(SiteDataError):
    """Raised when a data file is not valid JSON or not a collection of records."""
    def __init__(self, path, details: str = None):
        self.path = path
        self.details = details
        super().__init__(
            f"Invalid data file {path}: {details}",
            f"❌ Data file '{path}' could not be read. It must contain a JSON list of records."
        )
