"""Exceptions package.

A failed match is not an error and never raises; these exceptions cover
image decoding and configuration problems only.
"""

from ..base_exceptions import PixelfindException
from .configuration_exception import ConfigurationError
from .image_processing_exception import ImageProcessingError

__all__ = [
    "PixelfindException",
    "ImageProcessingError",
    "ConfigurationError",
]
