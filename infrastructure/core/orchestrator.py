"""Provisioning orchestrator: route table in, topology out."""

from __future__ import annotations

import uuid
from typing import Callable, Iterable, Optional, TypeVar, Union

from infrastructure.config.settings import ProvisioningSettings
from infrastructure.core.api import ApiComposer
from infrastructure.core.capabilities import ApiCapability, ComputeCapability, StorageCapability
from infrastructure.core.compute import ComputeFactory
from infrastructure.core.errors import OrderingError, PlatformError, ProvisioningError
from infrastructure.core.logging_utils import get_logger
from infrastructure.core.permissions import PermissionBinder
from infrastructure.core.routes import RouteDefinition, RouteTable
from infrastructure.core.storage import StorageProvisioner
from infrastructure.core.topology import Topology

T = TypeVar("T")


class ProvisioningOrchestrator:
    """Sequence storage, API, and per-route compute/permission/binding steps.

    The orchestrator is single-use: one instance provisions one topology.
    Any failure aborts the whole run; nothing is retried or rolled back here.
    """

    def __init__(
        self,
        *,
        storage: StorageCapability,
        compute: ComputeCapability,
        api: ApiCapability,
        settings: ProvisioningSettings,
        deployment_id: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.storage_provisioner = StorageProvisioner(storage)
        self.compute_factory = ComputeFactory(
            compute,
            payload_ref=settings.payload_directory,
            name_prefix=settings.function_name_prefix,
        )
        self.permission_binder = PermissionBinder(storage, compute)
        self.api_composer = ApiComposer(api)
        self._provisioned = False
        self.logger = get_logger(
            __name__,
            deployment_id=deployment_id or uuid.uuid4().hex[:12],
            environment=settings.environment,
        )

    def provision(self, routes: Union[RouteTable, Iterable[RouteDefinition]]) -> Topology:
        if self._provisioned:
            raise OrderingError("Orchestrator has already provisioned a topology")
        table = routes if isinstance(routes, RouteTable) else RouteTable(routes)
        settings = self.settings
        self._provisioned = True

        storage = self._step(
            "provision_storage",
            None,
            lambda: self.storage_provisioner.provision_storage(
                settings.partition_key_name,
                settings.sort_key_name,
                settings.table_name,
            ),
        )
        self.logger.info("Provisioned storage", extra={"step": "provision_storage"})

        api = self._step(
            "create_api_surface",
            None,
            lambda: self.api_composer.create_api_surface(settings.api_name, settings.stage_name),
        )
        self.logger.info("Created API surface", extra={"step": "create_api_surface"})

        topology = Topology(storage=storage, api=api)
        for route in table:
            unit = self._step(
                "create_compute_unit",
                route.name,
                lambda: self.compute_factory.create_compute_unit(route.name, settings.build_target, storage),
            )
            topology.units.append(unit)

            topology.grants.append(
                self._step("grant_access", route.name, lambda: self.permission_binder.grant_access(unit, storage))
            )
            topology.grants.append(
                self._step("grant_logging", route.name, lambda: self.permission_binder.grant_logging(unit))
            )

            binding = self._step(
                "bind_route",
                route.name,
                lambda: self.api_composer.bind_route(api, route.path, route.method, unit),
            )
            topology.bindings.append(binding)
            self.logger.info(
                "Bound route",
                extra={
                    "route": route.name,
                    "unit": unit.name,
                    "method": route.method.value,
                    "path": route.path,
                },
            )

        self.logger.info(
            "Provisioning complete",
            extra={"count": len(topology.units), "step": "complete"},
        )
        return topology

    def _step(self, step: str, route_name: Optional[str], action: Callable[[], T]) -> T:
        try:
            return action()
        except ProvisioningError:
            raise
        except Exception as exc:
            self.logger.error(
                "Platform rejected provisioning step",
                extra={"step": step, "route": route_name},
            )
            target = f" for route '{route_name}'" if route_name else ""
            raise PlatformError(f"{step} failed{target}: {exc}", step=step, route_name=route_name) from exc
