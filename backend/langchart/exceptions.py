"""Language chart exception classes."""


class LangChartError(Exception):
    """Base exception for all language chart errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(LangChartError):
    """Raised when a settings value is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class UpstreamAuthError(LangChartError):
    """Raised when the GitHub token is missing or rejected."""

    def __init__(self, message: str) -> None:
        super().__init__("UPSTREAM_AUTH_ERROR", message)


class UpstreamNetworkError(LangChartError):
    """Raised on any other GitHub API or transport failure."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__("UPSTREAM_NETWORK_ERROR", message)
        self.status = status


class RenderingError(LangChartError):
    """Raised when the SVG chart cannot be built."""

    def __init__(self, message: str) -> None:
        super().__init__("RENDERING_ERROR", message)
