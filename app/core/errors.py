class ProductServiceError(Exception):
    """The product catalog could not be fetched or understood."""


class InferenceError(Exception):
    """The hosted model call failed or produced no answer."""
