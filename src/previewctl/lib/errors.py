"""Custom exception hierarchy for previewctl configuration and operations."""


class PreviewCtlError(Exception):
    """Base exception for all previewctl errors.

    All previewctl-specific exceptions inherit from this class, enabling
    centralized exception handling in the controller and the CLI.
    """

    pass


class ConfigError(PreviewCtlError):
    """Exception raised for configuration errors.

    This exception is raised when configuration loading or parsing fails.
    It includes field-specific information to help users identify and fix
    configuration issues.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class ValidationError(PreviewCtlError):
    """Exception raised when an inbound event payload fails validation.

    Attributes:
        field: The field that failed validation
        message: Description of the validation failure
        expected: Human description of expected value/type
        actual: The actual value that failed validation
    """

    def __init__(
        self,
        field: str,
        message: str,
        expected: str,
        actual: str,
    ) -> None:
        """Initialize ValidationError with detailed information.

        Args:
            field: Field that failed validation (can use dot notation for nested fields)
            message: Description of what went wrong
            expected: Human-readable description of expected value
            actual: The actual value that failed
        """
        self.field = field
        self.message = message
        self.expected = expected
        self.actual = actual
        full_message = (
            f"Validation error in '{field}': {message}\n"
            f"  Expected: {expected}\n"
            f"  Got: {actual}"
        )
        super().__init__(full_message)


class DeploymentError(PreviewCtlError):
    """Exception raised when an environment platform operation fails.

    Attributes:
        operation: Platform operation that failed (resolve, status, terminate)
        message: Human-readable error message
    """

    def __init__(self, operation: str, message: str) -> None:
        """Create a deployment error for a named operation."""
        self.operation = operation
        self.message = message
        super().__init__(f"Deployment {operation} failed: {message}")


class CloudSDKNotInstalledError(DeploymentError):
    """Exception raised when a cloud provider SDK is not importable."""

    def __init__(self, provider: str, sdk_name: str) -> None:
        """Create an error naming the missing SDK package."""
        self.provider = provider
        self.sdk_name = sdk_name
        super().__init__(
            operation="initialize",
            message=(
                f"The {provider} SDK is not installed. "
                f"Install it with: pip install {sdk_name}"
            ),
        )


class GitHubConnectionError(PreviewCtlError):
    """Error raised when the GitHub API is unreachable.

    Attributes:
        base_url: The API base URL that failed
    """

    def __init__(self, base_url: str, original_error: Exception | None = None) -> None:
        """Initialize GitHubConnectionError with URL and optional cause.

        Args:
            base_url: The GitHub API base URL that failed to connect
            original_error: The underlying exception that caused the failure
        """
        self.base_url = base_url
        message = f"Failed to connect to GitHub API at {base_url}."
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class GitHubAPIError(PreviewCtlError):
    """Error raised when the GitHub API returns a non-2xx status.

    Attributes:
        url: Request URL
        status_code: HTTP status code returned
        detail: Error message from the response body, if any
    """

    def __init__(self, url: str, status_code: int, detail: str | None = None) -> None:
        """Create an API error from a failed response."""
        self.url = url
        self.status_code = status_code
        self.detail = detail
        message = f"GitHub API error {status_code} for {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
