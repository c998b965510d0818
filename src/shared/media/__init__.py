"""Image store adapter registry: pluggable blob storage for uploaded images."""

from shared import config

_image_store_instance = None


class ImageUploadFailed(Exception):
    """Raised when the image store rejects an upload."""


def get_image_store():
    """Return the configured image store adapter (singleton).

    Uses FakeImageStore by default. In production, configure via the
    IMAGE_STORE_ADAPTER environment variable.
    """
    global _image_store_instance
    if _image_store_instance is None:
        adapter = config.IMAGE_STORE_ADAPTER
        if adapter == "fake":
            from shared.media.fake_adapter import FakeImageStore

            _image_store_instance = FakeImageStore()
        else:
            raise ValueError(f"Unknown image store adapter: {adapter}")
    return _image_store_instance


def upload_image(source: str, folder: str) -> dict:
    """Upload through the configured store, returning {public_id, url}."""
    result = get_image_store().upload(source, folder)
    if result.get("status") != "stored":
        raise ImageUploadFailed(result.get("error") or "Something went wrong while uploading image")
    return {"public_id": result["public_id"], "url": result["url"]}


def destroy_image(public_id: str) -> str:
    """Remove an image from the configured store, returning the store's status."""
    return get_image_store().destroy(public_id).get("status")


def reset_image_store():
    """Reset the image store singleton (useful for testing)."""
    global _image_store_instance
    _image_store_instance = None
