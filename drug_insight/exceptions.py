"""
Error types raised by the analysis pipeline and its collaborators
"""


class DrugInsightError(Exception):
    """Base class for all Drug Insight errors"""


class EmptyInputError(DrugInsightError):
    """Raised when the text to analyze is blank or whitespace-only"""

    def __init__(self, message: str = "Please enter a medical article to analyze"):
        super().__init__(message)


class ReferenceDataError(DrugInsightError):
    """Raised when a reference table entry is malformed"""


class ExtractionError(DrugInsightError):
    """Raised when text cannot be extracted from an uploaded document"""


class UnsupportedFileTypeError(ExtractionError):
    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type}")


class FileTooLargeError(ExtractionError):
    def __init__(self, size_mb: float, limit_mb: float):
        self.size_mb = size_mb
        self.limit_mb = limit_mb
        super().__init__(f"File is {size_mb:.1f} MB, limit is {limit_mb} MB")


class FileReadError(ExtractionError):
    """Raised when a supported file cannot be decoded or parsed"""
