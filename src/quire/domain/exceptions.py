"""Domain exceptions."""


class QuireError(Exception):
    """Base exception for Quire."""

    pass


class Unauthorized(QuireError):
    """Request carries no valid credential."""

    pass


class Forbidden(QuireError):
    """Credential is valid but the user does not own the resource."""

    pass


class NotFound(QuireError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} {identifier} not found")


class ValidationError(QuireError):
    """Validation failed for input data."""

    pass


class UpstreamServiceError(QuireError):
    """Image generation or speech provider failed."""

    pass


class ConversionError(QuireError):
    """Document export toolchain failed."""

    pass
