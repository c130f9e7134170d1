"""Query-string helpers for list endpoints."""

from typing import Any, Iterable, List, Mapping, Tuple, Union
from urllib.parse import urlencode

from pydantic import BaseModel

QueryLike = Union[Mapping[str, Any], BaseModel, None]


def _render(value: Any) -> str:
    if value is True:
        return "true"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in value)
    return str(value)


def _items(query: QueryLike) -> Iterable[Tuple[str, Any]]:
    if query is None:
        return ()
    if isinstance(query, BaseModel):
        to_params = getattr(query, "to_params", None)
        if callable(to_params):
            return to_params().items()
        return query.model_dump(by_alias=True, exclude_none=True).items()
    return query.items()


def handle_query_string(query: QueryLike) -> str:
    """Serialize a flat mapping into a form-encoded query string.

    Keys keep their enumeration order. Falsy values (``""``, ``0``,
    ``None``, ``False``, empty collections) are skipped entirely, so a
    filter on zero or false cannot be expressed through this helper.

    :param query: Mapping of parameter names to values, or a model
        exposing ``to_params()``
    :type query: QueryLike
    :return: Encoded query string without the leading ``?``
    :rtype: str
    """
    pairs: List[Tuple[str, str]] = [
        (str(key), _render(value)) for key, value in _items(query) if value
    ]
    return urlencode(pairs)


def with_query(path: str, query: QueryLike = None) -> str:
    """Append the encoded ``query`` to ``path`` when it is non-empty.

    :param path: Endpoint path
    :type path: str
    :param query: Query parameters
    :type query: QueryLike
    :return: ``path`` or ``path?query``
    :rtype: str
    """
    query_string = handle_query_string(query)
    return f"{path}?{query_string}" if query_string else path

