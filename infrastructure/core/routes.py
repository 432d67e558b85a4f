"""Static route table for the serverless API."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Iterable, Iterator, Optional, Tuple

from infrastructure.core.errors import ConfigurationError

ROUTE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
LITERAL_SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
PARAMETER_SEGMENT_PATTERN = re.compile(r"^\{([A-Za-z_][A-Za-z0-9_]*)\}$")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: object) -> "HttpMethod":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().upper()
        try:
            return cls(text)
        except ValueError:
            raise ConfigurationError(f"Unsupported HTTP method: {value!r}") from None


def split_path(path: str) -> list[str]:
    """Validate a path template and return its segments.

    ``/`` yields no segments. Parameter segments must be a whole segment in
    braces (``{user_id}``) and may appear only once per path.
    """
    text = str(path or "").strip()
    if not text.startswith("/"):
        raise ConfigurationError(f"Path must start with '/': {path!r}")
    if text == "/":
        return []
    if text.endswith("/"):
        raise ConfigurationError(f"Path must not end with '/': {path!r}")

    segments = text[1:].split("/")
    parameters: set[str] = set()
    for segment in segments:
        if not segment:
            raise ConfigurationError(f"Path contains an empty segment: {path!r}")
        match = PARAMETER_SEGMENT_PATTERN.fullmatch(segment)
        if match:
            name = match.group(1)
            if name in parameters:
                raise ConfigurationError(f"Duplicate path parameter '{name}' in {path!r}")
            parameters.add(name)
            continue
        if not LITERAL_SEGMENT_PATTERN.fullmatch(segment):
            raise ConfigurationError(f"Malformed path segment '{segment}' in {path!r}")
    return segments


def path_prefixes(path: str) -> list[str]:
    """Return every non-root prefix of ``path``, shortest first."""
    segments = split_path(path)
    return ["/" + "/".join(segments[: index + 1]) for index in range(len(segments))]


@dataclass(frozen=True)
class RouteDefinition:
    name: str
    method: HttpMethod
    path: str

    def __post_init__(self) -> None:
        name = str(self.name or "").strip()
        if not ROUTE_NAME_PATTERN.fullmatch(name):
            raise ConfigurationError(f"Invalid route name: {self.name!r}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        path = str(self.path or "").strip()
        split_path(path)
        object.__setattr__(self, "path", path)

    @property
    def key(self) -> Tuple[HttpMethod, str]:
        return (self.method, self.path)


class RouteTable:
    """Immutable, ordered collection of unique routes."""

    def __init__(self, routes: Iterable[RouteDefinition]) -> None:
        ordered: list[RouteDefinition] = []
        names: set[str] = set()
        keys: set[Tuple[HttpMethod, str]] = set()
        for route in routes:
            if not isinstance(route, RouteDefinition):
                raise ConfigurationError(f"Route table entries must be RouteDefinition, got {type(route).__name__}")
            if route.name in names:
                raise ConfigurationError(f"Duplicate route name: {route.name}")
            if route.key in keys:
                raise ConfigurationError(f"Duplicate route binding: {route.method.value} {route.path}")
            names.add(route.name)
            keys.add(route.key)
            ordered.append(route)
        self._routes: Tuple[RouteDefinition, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[RouteDefinition]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._routes)} routes)"

    def get(self, name: str) -> Optional[RouteDefinition]:
        for route in self._routes:
            if route.name == name:
                return route
        return None

    def resource_paths(self) -> list[str]:
        """Return the distinct resource paths (root included) the table needs."""
        paths: list[str] = ["/"]
        for route in self._routes:
            for prefix in path_prefixes(route.path):
                if prefix not in paths:
                    paths.append(prefix)
        return paths


def route(name: str, method: str, path: str) -> RouteDefinition:
    return RouteDefinition(name=name, method=HttpMethod.parse(method), path=path)


DEFAULT_ROUTES = RouteTable(
    [
        route("deleteMicropost", "DELETE", "/v1/users/{user_id}/microposts/{micropost_id}"),
        route("deleteUser", "DELETE", "/v1/users/{user_id}"),
        route("getMicropost", "GET", "/v1/users/{user_id}/microposts/{micropost_id}"),
        route("getMicroposts", "GET", "/v1/users/{user_id}/microposts"),
        route("getUser", "GET", "/v1/users/{user_id}"),
        route("getUsers", "GET", "/v1/users"),
        route("postMicroposts", "POST", "/v1/users/{user_id}/microposts"),
        route("postUsers", "POST", "/v1/users"),
        route("putMicropost", "PUT", "/v1/users/{user_id}/microposts/{micropost_id}"),
        route("putUser", "PUT", "/v1/users/{user_id}"),
    ]
)
