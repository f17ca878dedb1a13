class DunLabelsError(Exception):
    """Base exception for the DUN label toolkit."""
    pass

class LabelImportError(DunLabelsError):
    """Raised when a CSV file cannot be read."""
    pass

class LabelStorageError(DunLabelsError):
    """Raised when a label set cannot be stored or the store is unreadable."""
    pass

class LabelRenderError(DunLabelsError):
    """Raised when a label sheet cannot be rendered."""
    pass
