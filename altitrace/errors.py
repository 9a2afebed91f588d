"""Exception hierarchy for the Altitrace SDK."""


class AltitraceError(Exception):
    """Base error for all SDK errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class InputValidationError(AltitraceError, ValueError):
    """Invalid input parameter."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "VALIDATION_ERROR")


class MissingRequiredFieldError(InputValidationError):
    """A required field was never supplied."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"{field_name} is required")
        self.field_name = field_name


class BuilderConsumedError(AltitraceError, RuntimeError):
    """A single-use builder was used after build() or execute()."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot call {operation}() on a builder that was already consumed",
            "BUILDER_CONSUMED",
        )
        self.operation = operation


class ApiError(AltitraceError):
    """The simulation API answered with an unsuccessful envelope."""


class RpcError(AltitraceError):
    """The JSON-RPC node answered with an error member."""

    def __init__(self, message: str, rpc_code: int | None = None) -> None:
        super().__init__(message, "RPC_ERROR")
        self.rpc_code = rpc_code


class ConfigurationError(AltitraceError, ValueError):
    """Invalid SDK configuration."""

    def __init__(self, message: str, config_key: str | None = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


__all__ = [
    "AltitraceError",
    "ApiError",
    "BuilderConsumedError",
    "ConfigurationError",
    "InputValidationError",
    "MissingRequiredFieldError",
    "RpcError",
]
