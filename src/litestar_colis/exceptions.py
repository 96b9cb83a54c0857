"""Exception hierarchy and HTTP mapping for litestar-colis."""

from litestar import Request, Response


class ColisError(Exception):
    """Base class for every parcel-core error."""

    code = "colis_error"


class NotFoundError(ColisError):
    """A referenced record does not exist."""

    code = "not_found"


class ParcelNotFoundError(NotFoundError):
    """Parcel with given ID or reference was not found."""

    def __init__(self, parcel_id: str) -> None:
        self.parcel_id = parcel_id
        super().__init__(f"Parcel {parcel_id!r} not found")


class SenderNotFoundError(NotFoundError):
    """Sender ID does not resolve through the sender locator."""

    def __init__(self, sender_id: str) -> None:
        self.sender_id = sender_id
        super().__init__(f"Sender {sender_id!r} not found")


class InvalidStatusError(ColisError):
    """Status name is not one of the known parcel statuses."""

    code = "invalid_status"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unknown parcel status {value!r}")


class InvalidTransitionError(ColisError):
    """Status change is not an edge of the lifecycle graph."""

    code = "invalid_transition"

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move parcel from {current} to {target}")


class PreconditionFailedError(ColisError):
    """Parcel is not in a state that allows the requested operation."""

    code = "precondition_failed"


class CourierNotAssignedError(PreconditionFailedError):
    def __init__(self, parcel_id: str | None) -> None:
        self.parcel_id = parcel_id
        super().__init__(
            f"Parcel {parcel_id!r} cannot be picked up without a courier"
        )


class ConflictError(ColisError):
    """Operation conflicts with the current state of stored parcels."""

    code = "conflict"


class CourierBusyError(ConflictError):
    def __init__(self, courier_id: str) -> None:
        self.courier_id = courier_id
        super().__init__(
            f"Courier {courier_id!r} already has a parcel in progress"
        )


class ReferenceCollisionError(ConflictError):
    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique parcel reference "
            f"after {attempts} attempts"
        )


class PaymentRevertError(ConflictError):
    def __init__(self, parcel_id: str | None, status: str) -> None:
        self.parcel_id = parcel_id
        super().__init__(
            f"Payment of parcel {parcel_id!r} is already PAID "
            f"and cannot be moved to {status}"
        )


class ParcelValidationError(ColisError):
    """Parcel fields are well-formed but semantically unusable."""

    code = "validation_error"


class TariffNotFoundError(ParcelValidationError):
    """No tariff cell matches the parcel zone and weight."""


def _error_response(
    request: Request, detail: str, code: str, status_code: int
) -> Response:
    return Response(
        content={"detail": detail, "code": code},
        status_code=status_code,
    )


def handle_not_found(request: Request, exc: NotFoundError) -> Response:
    """Map NotFoundError to 404."""
    return _error_response(request, str(exc), exc.code, 404)


def handle_invalid_status(
    request: Request, exc: InvalidStatusError
) -> Response:
    """Map InvalidStatusError to 400."""
    return _error_response(request, str(exc), exc.code, 400)


def handle_invalid_transition(
    request: Request, exc: InvalidTransitionError
) -> Response:
    """Map InvalidTransitionError to 409."""
    return _error_response(request, str(exc), exc.code, 409)


def handle_precondition_failed(
    request: Request, exc: PreconditionFailedError
) -> Response:
    """Map PreconditionFailedError to 412."""
    return _error_response(request, str(exc), exc.code, 412)


def handle_conflict(request: Request, exc: ConflictError) -> Response:
    """Map ConflictError to 409."""
    return _error_response(request, str(exc), exc.code, 409)


def handle_validation_error(
    request: Request, exc: ParcelValidationError
) -> Response:
    """Map ParcelValidationError to 422."""
    return _error_response(request, str(exc), exc.code, 422)


EXCEPTION_HANDLERS = {
    NotFoundError: handle_not_found,
    InvalidStatusError: handle_invalid_status,
    InvalidTransitionError: handle_invalid_transition,
    PreconditionFailedError: handle_precondition_failed,
    ConflictError: handle_conflict,
    ParcelValidationError: handle_validation_error,
}
