class TaxonomyError(Exception):
    """Raised when the category taxonomy or its prompt templates cannot be loaded."""
