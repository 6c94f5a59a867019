"""Request Binding

Connects validator chains to an incoming request. A Bouncer is created per
request by ``BouncerMiddleware`` and exposes:

- ``validate_param(key)``: route path parameter
- ``validate_query(key)``: query string value (repeated keys become lists)
- ``validate_body(key)``: parsed JSON or form body field
- ``check(result, tip)`` / ``check_not(result, tip)``: request-level checks

The three getters are ``(request) -> mapping`` functions and can be replaced.
A getter returning ``None`` is treated as an empty mapping. Keys that are not
present literally are looked up as dotted paths (``"user.name"``, ``"items.0"``).
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from starlette.requests import Request

from bouncer.validation import ValidationError, Validator, ValidatorRegistry

Getter = Callable[[Request], Any]

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def flatten_multi(params: Any) -> dict[str, Any]:
    """Collapse a multi-dict so single values stay scalars and repeats become lists."""
    if params is None:
        return {}
    if not hasattr(params, "getlist"):
        return dict(params)
    result: dict[str, Any] = {}
    for key in params.keys():
        values = params.getlist(key)
        result[key] = values[0] if len(values) == 1 else list(values)
    return result


def default_get_params(request: Request) -> Mapping[str, Any]:
    return request.path_params


def default_get_query(request: Request) -> Mapping[str, Any]:
    return flatten_multi(request.query_params)


def default_get_body(request: Request) -> Any:
    return getattr(request.state, "body", None)


def lookup(source: Any, key: str) -> Any:
    """Find ``key`` in an extracted mapping, falling back to a dotted path."""
    if source is None:
        return None
    if isinstance(source, Mapping) and key in source:
        return source[key]

    current = source
    for part in key.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        elif (
            isinstance(current, list)
            and part.isascii()
            and part.isdigit()
            and int(part) < len(current)
        ):
            current = current[int(part)]
        else:
            return None
        if current is None:
            return None
    return current


async def load_body(request: Request) -> Any:
    """Parse the request body for ``validate_body``.

    JSON, urlencoded and multipart form bodies are supported; other content
    types yield ``None``. Repeated form fields become lists.
    A malformed JSON body is a request-level ValidationError.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json" or content_type.endswith("+json"):
        raw = await request.body()
        if not raw:
            return None
        try:
            return await request.json()
        except ValueError as exc:
            raise ValidationError(None, "Malformed JSON body") from exc
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return flatten_multi(form)
    return None


class Bouncer:
    """Per-request entry point for validator chains."""

    def __init__(
        self,
        request: Request,
        vals: dict[str, Any],
        get_params: Getter | None = None,
        get_query: Getter | None = None,
        get_body: Getter | None = None,
    ):
        self.request = request
        self.vals = vals
        self.get_params = get_params or default_get_params
        self.get_query = get_query or default_get_query
        self.get_body = get_body or default_get_body
        self.registry = ValidatorRegistry(request, vals)

    def _validate(self, key: str, getter: Getter) -> Validator:
        return self.registry.get_or_create(key, lambda: lookup(getter(self.request), key))

    def validate_param(self, key: str) -> Validator:
        return self._validate(key, self.get_params)

    def validate_query(self, key: str) -> Validator:
        return self._validate(key, self.get_query)

    def validate_body(self, key: str) -> Validator:
        return self._validate(key, self.get_body)

    def check(self, result: Any, tip: str | None = None) -> None:
        if not result:
            raise ValidationError(None, tip or "Invalid request")

    def check_not(self, result: Any, tip: str | None = None) -> None:
        if result:
            raise ValidationError(None, tip or "Invalid request")
