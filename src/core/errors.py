"""Exception hierarchy for agenda rendering and credential storage."""


class TermcalError(Exception):
    """Base exception for termcal operations."""

    code = "INTERNAL_ERROR"


# =============================================================================
# REQUEST VALIDATION
# =============================================================================


class RequestValidationError(TermcalError):
    """Render request failed validation; nothing was rendered."""

    code = "VALIDATION_ERROR"


class InvalidRequestError(RequestValidationError):
    """Missing or malformed required field (e.g., empty user id)."""

    code = "INVALID_REQUEST"


class InvalidPatternError(RequestValidationError):
    """An exclude or highlight regex failed to compile."""

    code = "INVALID_PATTERN"

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern


class InvalidHighlightFormatError(RequestValidationError):
    """Highlight list has an odd number of elements."""

    code = "INVALID_HIGHLIGHTS"


class InvalidTimezoneError(RequestValidationError):
    """Timezone name does not resolve."""

    code = "INVALID_TIMEZONE"

    def __init__(self, time_zone: str):
        super().__init__(f"Invalid TZ ({time_zone})")
        self.time_zone = time_zone


# =============================================================================
# CREDENTIALS
# =============================================================================


class CredentialError(TermcalError):
    """Base exception for credential cache operations."""

    pass


class CredentialNotFoundError(CredentialError):
    """No credential stored for the user id."""

    code = "CREDENTIAL_NOT_FOUND"


class CorruptRecordError(CredentialError):
    """Stored credential blob could not be decoded."""

    code = "CORRUPT_RECORD"


class PersistenceError(CredentialError):
    """Durable storage read or write failed."""

    code = "PERSISTENCE_ERROR"


# =============================================================================
# UPSTREAM
# =============================================================================


class UpstreamFetchError(TermcalError):
    """Event source failed or timed out."""

    code = "UPSTREAM_ERROR"
