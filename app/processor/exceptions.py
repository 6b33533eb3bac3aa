class ClassificationError(Exception):
    """Base exception for all classification pipeline errors."""


class InvalidInputError(ClassificationError):
    """Raised when the uploaded document is empty or not a readable PDF."""


class IOFailureError(ClassificationError):
    """Raised when the upload cannot be copied to a local file."""


class BackendFailureError(ClassificationError):
    """Raised when a call to the assistants backend fails or returns a bad shape."""


class IndexingFailedError(ClassificationError):
    """Raised when the vector store reports a failed indexing status."""


class RunFailedError(ClassificationError):
    """Raised when the classification run ends in the failed status."""


class IncompleteConversationError(ClassificationError):
    """Raised when the thread never holds both the question and a reply."""


class PollTimeoutError(ClassificationError):
    """Raised when a bounded poll runs out of time or attempts."""
