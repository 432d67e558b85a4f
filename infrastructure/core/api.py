"""API surface composition: path tree and method bindings."""

from __future__ import annotations

from typing import Any, Optional, Set, Tuple

from infrastructure.core.capabilities import ApiCapability
from infrastructure.core.errors import ConfigurationError, OrderingError
from infrastructure.core.routes import HttpMethod, path_prefixes, split_path
from infrastructure.core.topology import ApiSurface, ComputeUnit, RouteBinding

ROOT_PATH = "/"


class ApiComposer:
    def __init__(self, capability: ApiCapability) -> None:
        self._capability = capability
        self._surface: Optional[ApiSurface] = None
        self._bound: Set[Tuple[str, HttpMethod]] = set()

    def create_api_surface(self, name: str, stage_name: str) -> ApiSurface:
        api_name = str(name or "").strip()
        stage = str(stage_name or "").strip()
        if not api_name:
            raise ConfigurationError("API name must be provided")
        if not stage:
            raise ConfigurationError("API stage name must be provided")
        if self._surface is not None:
            raise OrderingError(f"API surface '{self._surface.name}' already exists")

        handle = self._capability.create_api(name=api_name, stage_name=stage)
        surface = ApiSurface(name=api_name, stage_name=stage, handle=handle)
        surface.nodes[ROOT_PATH] = self._capability.resolve_path(handle, ROOT_PATH)
        self._surface = surface
        return surface

    def bind_route(
        self,
        api: Optional[ApiSurface],
        path: str,
        method: HttpMethod | str,
        unit: Optional[ComputeUnit],
    ) -> RouteBinding:
        if api is None or api.handle is None:
            raise OrderingError(f"API surface must exist before binding {path}")
        if api is not self._surface:
            raise OrderingError(f"API surface '{api.name}' was not created by this composer")
        if unit is None or unit.handle is None:
            raise OrderingError(f"Compute unit must exist before binding {path}")

        http_method = HttpMethod.parse(method)
        normalized = "/" + "/".join(split_path(path))
        if (normalized, http_method) in self._bound:
            raise ConfigurationError(f"Duplicate method binding: {http_method.value} {normalized}")

        node = self._resource_node(api, normalized)
        self._capability.bind_method(node, http_method.value, unit.handle)
        self._bound.add((normalized, http_method))
        return RouteBinding(
            route_name=unit.route_name,
            method=http_method,
            path=normalized,
            unit_name=unit.name,
        )

    def _resource_node(self, api: ApiSurface, path: str) -> Any:
        """Return the node for ``path``, registering missing prefixes on the way."""
        if ROOT_PATH not in api.nodes:
            api.nodes[ROOT_PATH] = self._capability.resolve_path(api.handle, ROOT_PATH)
        for prefix in path_prefixes(path):
            if prefix not in api.nodes:
                api.nodes[prefix] = self._capability.resolve_path(api.handle, prefix)
        return api.nodes[path]
