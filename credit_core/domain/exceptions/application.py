"""Credit application domain exceptions."""

from .base import InvalidArgumentException, InvalidStateException, NotFoundException


class ApplicationNotFoundException(NotFoundException):
    """Raised when a credit application cannot be found."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Credit application not found: {application_id}",
            code="APPLICATION_NOT_FOUND",
        )
        self.application_id = application_id


class InvalidApplicationException(InvalidArgumentException):
    """Raised when a credit application submission is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_APPLICATION",
        )


class ApplicationOwnershipException(InvalidArgumentException):
    """Raised when an application does not belong to the requesting customer."""

    def __init__(self, application_id: str, customer_number: str):
        super().__init__(
            message=(
                f"Credit application {application_id} does not belong "
                f"to customer {customer_number}"
            ),
            code="APPLICATION_OWNERSHIP_MISMATCH",
        )
        self.application_id = application_id
        self.customer_number = customer_number


class ApplicationNotRefinanceableException(InvalidStateException):
    """Raised when refinancing an application that is not approved."""

    def __init__(self, application_id: str, status: str):
        super().__init__(
            message=(
                f"Only approved credit applications can be refinanced: "
                f"{application_id} is {status}"
            ),
            code="APPLICATION_NOT_REFINANCEABLE",
        )
        self.application_id = application_id
        self.status = status


class InvalidStatusTransitionException(InvalidStateException):
    """Raised when moving an application out of a terminal status."""

    def __init__(self, application_id: str, from_status: str, to_status: str):
        super().__init__(
            message=(
                f"Cannot move credit application {application_id} "
                f"from {from_status} to {to_status}"
            ),
            code="INVALID_STATUS_TRANSITION",
        )
        self.application_id = application_id
        self.from_status = from_status
        self.to_status = to_status
