"""Error taxonomy shared by the workflow services, the JSON API and the pages."""


class AppError(Exception):
    """Base class; `message` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthError(AppError):
    """Authentication failed (bad credentials, duplicate e-mail, provider refusal)."""


class DuplicateEmail(AuthError):
    def __init__(
        self,
        message: str = "This email is already registered. Please log in instead.",
    ) -> None:
        super().__init__(message)


class InvalidCredentials(AuthError):
    def __init__(self, message: str = "Invalid email or password.") -> None:
        super().__init__(message)


class RegistrationError(AuthError):
    """Registration failed for a reason other than a duplicate e-mail."""


class LoginError(AuthError):
    """Login failed; callers must clear any session state they set."""


class NotFoundError(AppError):
    """Requested application, profile or service does not exist (or is not visible)."""


class ValidationError(AppError):
    """User input rejected before touching any collaborator."""


class MissingDocuments(ValidationError):
    """One or more required document labels have no uploaded file."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Please upload all required documents: " + ", ".join(self.missing)
        )


class UpstreamError(AppError):
    """Unexpected failure from the identity provider, database or blob store."""
