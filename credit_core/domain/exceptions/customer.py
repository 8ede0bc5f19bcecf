"""Customer-related domain exceptions."""

from .base import InvalidArgumentException


class UnknownCustomerCategoryException(InvalidArgumentException):
    """Raised when a decision is requested for a category with no policy."""

    def __init__(self, category: object):
        super().__init__(
            message=f"Unknown customer category: {category}",
            code="UNKNOWN_CUSTOMER_CATEGORY",
        )
        self.category = category
