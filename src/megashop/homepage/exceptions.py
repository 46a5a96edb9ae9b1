"""Homepage domain exceptions."""


class AlreadyFeaturedError(Exception):
    """The product is already featured."""
