"""Shared Pydantic models for the Point API client.

These models document the payload shapes the service exchanges. Every
client method also accepts and returns plain dicts, so the models are a
convenience for callers that want validation and attribute access.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BaseAPIModel(BaseModel):
    """Base model for service payloads.

    Extra fields are kept because the service adds fields without notice.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ListQuery(BaseAPIModel):
    """Query parameters understood by every list endpoint.

    Field filters go into ``filters`` using their wire names, e.g.
    ``ListQuery(_limit=10, filters={"_from_timeCreated": "2024-01-01"})``.

    :param limit: Page size (``_limit``)
    :param page: 1-based page number (``_page``)
    :param projection: Projection (``_fields``), joined with commas
    :param sort: Sort keys (``_sort``), ``-`` prefix for descending
    :param search: Full-text search term (``_search``)
    :param join: Related resources to embed (``_join``)
    :param skip: Number of rows to skip (``_skip``)
    :param lang: Response language (``_lang``)
    :param filters: Field filters by wire name (``_from_X``, ``_to_X``,
        ``_null_X``, ``_not_null_X`` or plain equality)
    """

    limit: Optional[int] = Field(None, alias="_limit")
    page: Optional[int] = Field(None, alias="_page")
    projection: Optional[Union[str, List[str]]] = Field(None, alias="_fields")
    sort: Optional[Union[str, List[str]]] = Field(None, alias="_sort")
    search: Optional[str] = Field(None, alias="_search")
    join: Optional[Union[str, List[str]]] = Field(None, alias="_join")
    skip: Optional[int] = Field(None, alias="_skip")
    lang: Optional[str] = Field(None, alias="_lang")
    filters: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    def to_params(self) -> Dict[str, Any]:
        """Return the query as wire-named parameters.

        :return: Ordered mapping of declared fields followed by extra
            filters, with None values dropped
        :rtype: Dict[str, Any]
        """
        params: Dict[str, Any] = {}
        for name, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, list):
                value = ",".join(str(item) for item in value)
            params[name] = value
        params.update(self.filters)
        return params


class ResultPage(BaseAPIModel, Generic[T]):
    """Envelope returned by list and get-by-id endpoints.

    :param total: Number of matching rows
    :param data: Rows on this page
    """

    total: int = 0
    data: List[T] = Field(default_factory=list)


class UserLogin(BaseAPIModel):
    """Credentials for password login and registration."""

    login: Optional[str] = None
    email: Optional[str] = None
    password: str
    is_init: Optional[str] = Field(None, alias="isInit")


class LoginResult(BaseAPIModel):
    """Successful login or registration response.

    :param token: Access token
    :param refresh: Refresh token
    """

    id: Optional[int] = None
    login: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = Field(None, alias="fullName")
    statuses: List[str] = Field(default_factory=list)
    token: Optional[str] = None
    refresh: Optional[str] = None


class RefreshResult(BaseAPIModel):
    """Response of the refresh endpoint."""

    token: str


class ImageInfo(BaseAPIModel):
    """Stored image metadata."""

    id: str
    name: Optional[str] = None
    path: Optional[str] = None
    type: Optional[str] = None
    group: Optional[str] = None
    size_name: Optional[str] = Field(None, alias="sizeName")
    user_id: Optional[int] = Field(None, alias="userId")
    time_created: Optional[str] = Field(None, alias="timeCreated")
    time_updated: Optional[str] = Field(None, alias="timeUpdated")
