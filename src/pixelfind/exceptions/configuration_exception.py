"""Configuration exception.

Exception thrown when configuration is invalid.
"""

from ..base_exceptions import PixelfindException


class ConfigurationError(PixelfindException):
    """Exception thrown when settings cannot be loaded or validated."""

    def __init__(
        self,
        message: str = "Configuration error",
        cause: Exception | None = None,
        config_key: str | None = None,
    ) -> None:
        """Initialize configuration exception.

        Args:
            message: Error message
            cause: Underlying exception that caused this error
            config_key: Configuration key that caused the error (if applicable)
        """
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            message,
            error_code="CONFIGURATION",
            context={"config_key": config_key} if config_key else None,
        )
        self.config_key = config_key
        if cause is not None:
            self.__cause__ = cause
