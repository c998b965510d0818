"""Image store port: abstract interface for blob storage of product and avatar images.

Domain code programs against the port; adapters are swapped via configuration.
"""

from abc import ABC, abstractmethod


class ImageStorePort(ABC):
    """Abstract interface for image storage adapters."""

    @abstractmethod
    def upload(
        self,
        source: str,
        folder: str,
        max_width: int = 300,
        max_height: int = 300,
    ) -> dict:
        """Upload an image and return where it now lives.

        Args:
            source: Data URI, remote URL or local path understood by the adapter
            folder: Logical folder the image is filed under ("products", "avatars")
            max_width: Width limit applied by the store when resizing
            max_height: Height limit applied by the store when resizing

        Returns:
            dict with keys: public_id, url, status ("stored" or "failed"), error (optional)
        """
        ...

    @abstractmethod
    def destroy(self, public_id: str) -> dict:
        """Delete a stored image.

        Returns:
            dict with keys: public_id, status ("deleted", "not_found" or "failed")
        """
        ...
