"""Image processing exception.

Exception thrown when an image cannot be decoded into a pixel buffer.
"""

from ..base_exceptions import PixelfindException


class ImageProcessingError(PixelfindException):
    """Exception thrown when image decoding or conversion fails.

    Raised when a file cannot be read, bytes are not a recognised image
    format, or an array has a shape that is not a pixel grid.
    """

    def __init__(
        self,
        message: str = "Image processing failed",
        cause: Exception | None = None,
        image_path: str | None = None,
    ) -> None:
        """Initialize image processing exception.

        Args:
            message: Error message
            cause: Underlying exception that caused this error
            image_path: Path to image that failed processing (if applicable)
        """
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            message,
            error_code="IMAGE_PROCESSING",
            context={"image_path": image_path} if image_path else None,
        )
        self.image_path = image_path
        if cause is not None:
            self.__cause__ = cause
