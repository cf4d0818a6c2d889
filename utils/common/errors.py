class InvalidParameterError(ValueError):
    """Raised when distribution or generation parameters are malformed."""


class DegenerateFitError(ValueError):
    """Raised when the least-squares fit cannot define a decision boundary."""
