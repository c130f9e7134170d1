"""Point API models package.

Pydantic models describing request queries and response payloads.
"""

from .base_models import (
    BaseAPIModel,
    ImageInfo,
    ListQuery,
    LoginResult,
    RefreshResult,
    ResultPage,
    UserLogin,
)

__all__ = [
    "BaseAPIModel",
    "ImageInfo",
    "ListQuery",
    "LoginResult",
    "RefreshResult",
    "ResultPage",
    "UserLogin",
]
