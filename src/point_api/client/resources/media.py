"""Image and news endpoints.

Image uploads accept the ``file`` field either as a string reference to
an already stored file, sent in a JSON body, or as binary content (``bytes``
or an open binary file), sent as ``multipart/form-data``.

Examples:
    >>> await client.add_image({"file": "https://cdn/cat.png", "group": "avatars"})
    >>> with open("cat.png", "rb") as fh:
    ...     await client.add_image({"file": fh, "group": "avatars"})
"""

import logging
from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient, to_payload

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"


def is_binary_payload(value: Any) -> bool:
    """Check whether ``value`` must be sent as a multipart file.

    :param value: Upload field value
    :type value: Any
    :return: True for bytes and file-like objects
    :rtype: bool
    """
    return isinstance(value, (bytes, bytearray)) or hasattr(value, "read")


class MediaMixin(BaseApiClient):
    """Endpoints under ``/images`` and ``/news``."""

    async def _post_upload(self, endpoint: str, body: Any) -> Any:
        if is_binary_payload(body):
            return await self.post_form(endpoint, files={UPLOAD_FIELD: body})

        payload = to_payload(body)
        if isinstance(payload, dict) and is_binary_payload(payload.get(UPLOAD_FIELD)):
            fields = {k: v for k, v in payload.items() if k != UPLOAD_FIELD}
            logger.debug("Uploading binary %s to %s", UPLOAD_FIELD, endpoint)
            return await self.post_form(
                endpoint, fields, files={UPLOAD_FIELD: payload[UPLOAD_FIELD]}
            )
        return await self.post(endpoint, payload)

    async def get_images(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/images", query))

    async def add_image(self, body: Any) -> Any:
        """Store an image.

        :param body: Image fields; ``file`` is a string reference or
            binary content. Raw ``bytes`` or a file object are accepted as
            the whole body.
        :type body: Any
        :return: Stored image metadata
        :rtype: Any
        """
        return await self._post_upload("/images", body)

    async def get_images_by_id(self, image_id: Any) -> Any:
        return await self.get(f"/images/{image_id}")

    async def delete_image_by_id(self, image_id: Any) -> Any:
        return await self.delete(f"/images/{image_id}")

    async def delete_images_by_id_in_news_by_news_id(
        self, news_id: Any, image_id: Any
    ) -> Any:
        """Detach an image from a news item."""
        return await self.delete(f"/news/{news_id}/images/{image_id}")

    async def add_images_by_id_in_news_by_news_id(
        self, news_id: Any, image_id: Any, body: Any = None
    ) -> Any:
        """Attach an image to a news item."""
        return await self._post_upload(f"/news/{news_id}/images/{image_id}", body)

    async def get_news(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/news", query))

    async def add_new(self, body: Any) -> Any:
        return await self.post("/news", body)

    async def get_news_by_id(self, news_id: Any) -> Any:
        return await self.get(f"/news/{news_id}")

    async def update_new_by_id(self, news_id: Any, body: Any) -> Any:
        return await self.put(f"/news/{news_id}", body)

    async def delete_new_by_id(self, news_id: Any) -> Any:
        return await self.delete(f"/news/{news_id}")
