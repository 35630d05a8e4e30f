class DomainError(Exception):
    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    def __init__(self, field: str, message: str, details: dict | None = None):
        code = f"CFG_{field.upper()}_001"
        msg = f"Invalid configuration for {field}: {message}"
        super().__init__(code, msg, details or {"field": field})


class InvalidTokenError(DomainError):
    """Position token is corrupt or was produced under an incompatible sort."""

    def __init__(self, message: str, code: str = "TOK_001", details: dict | None = None):
        super().__init__(code, message, details)


class SourceUnavailableError(DomainError):
    """Record source unreachable, or a scan returned a partial/ambiguous result."""

    def __init__(self, message: str, code: str = "SRC_001", details: dict | None = None):
        super().__init__(code, message, details)
