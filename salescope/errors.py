class InvalidArgumentError(ValueError):
    """Raised for caller input that cannot produce a meaningful result."""
