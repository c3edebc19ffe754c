class StorefrontError(Exception):
    """Base class for storefront domain errors."""


class ContentPathError(StorefrontError):
    """A dot-path walks through a value that is neither an object nor a list."""

    def __init__(self, path, segment):
        self.path = path
        self.segment = segment
        super().__init__(f"Cannot set '{path}': '{segment}' is not an object")


class ContentSaveError(StorefrontError):
    """Persisting a CMS page failed; local edits are kept."""


class LoginRequired(StorefrontError):
    def __init__(self, message="Please login to use wishlist", redirect="/login"):
        self.redirect = redirect
        super().__init__(message)


class DuplicateReview(StorefrontError):
    def __init__(self, message="You have already reviewed this product."):
        super().__init__(message)
