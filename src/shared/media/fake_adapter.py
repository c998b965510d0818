"""Fake image store: keeps uploads in memory for testing and development."""

from uuid import uuid4

from shared.media.port import ImageStorePort


class FakeImageStore(ImageStorePort):
    """Image store that records uploads in memory for test assertions."""

    def __init__(self):
        self.images: dict[str, dict] = {}
        self.destroyed: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Image upload failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Image upload failed"):
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def upload(
        self,
        source: str,
        folder: str,
        max_width: int = 300,
        max_height: int = 300,
    ) -> dict:
        if not self.should_succeed:
            return {
                "public_id": None,
                "url": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        public_id = f"storefront/{folder}/{uuid4().hex[:12]}"
        url = f"https://images.storefront.example.com/{public_id}?w={max_width}&h={max_height}"
        self.images[public_id] = {"source": source, "folder": folder, "url": url}

        return {"public_id": public_id, "url": url, "status": "stored"}

    def destroy(self, public_id: str) -> dict:
        if public_id not in self.images:
            return {"public_id": public_id, "status": "not_found"}

        del self.images[public_id]
        self.destroyed.append(public_id)
        return {"public_id": public_id, "status": "deleted"}

    def reset(self):
        """Clear stored images (useful between tests)."""
        self.images.clear()
        self.destroyed.clear()
        self.should_succeed = True
        self.failure_reason = "Image upload failed"
