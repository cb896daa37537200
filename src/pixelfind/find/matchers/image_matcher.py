"""Abstract base interface for image matching algorithms.

Defines the contract that all image matchers must implement.
"""

from abc import ABC, abstractmethod

from ...model.element import ImageBuffer, Region


class ImageMatcher(ABC):
    """Abstract base class for image matching algorithms.

    A matcher locates a template inside a source image and reports where
    it was found. Not finding the template is a normal outcome and is
    reported as None, never as an exception.
    """

    @abstractmethod
    def find(
        self,
        source: ImageBuffer,
        template: ImageBuffer,
        search_region: Region | None = None,
    ) -> Region | None:
        """Find the template in the source image.

        Args:
            source: Image to search in (eg. a screenshot)
            template: Image to search for
            search_region: Part of the source to scan. Defaults to the whole
                source; regions extending past the source are clamped.

        Returns:
            Region with the template's top-left position and size, or None
            if nothing was found
        """
