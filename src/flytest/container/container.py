# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Lightweight string-id service container with lazy construction."""

from __future__ import annotations

import difflib
import logging
from collections.abc import Callable
from typing import Any

from flytest.container.exceptions import NoSuchServiceError
from flytest.container.registry import Registration
from flytest.container.types import Scope

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service locator mapping string ids to lazily constructed services.

    Services are registered as zero-argument factories and built on first
    ``resolve()``. ``SINGLETON`` services are cached after construction,
    ``TRANSIENT`` services are rebuilt on every call. Registering an id
    that already exists replaces the previous registration.

    Usage::

        container = ServiceContainer()
        container.register("mailer", lambda: SmtpMailer(host="localhost"))
        mailer = container.resolve("mailer")
    """

    def __init__(self) -> None:
        self._registrations: dict[str, Registration] = {}

    def register(
        self,
        service_id: str,
        factory: Callable[[], Any],
        scope: Scope = Scope.SINGLETON,
    ) -> None:
        """Register a factory for *service_id*."""
        self._registrations[service_id] = Registration(
            service_id=service_id,
            factory=factory,
            scope=scope,
        )
        logger.debug("Registered service %r (%s)", service_id, scope.name)

    def set(self, service_id: str, instance: Any) -> None:
        """Register an already constructed service instance."""
        self._registrations[service_id] = Registration(
            service_id=service_id,
            instance=instance,
            initialized=True,
        )

    def exists(self, service_id: str) -> bool:
        """Check if a service is registered under *service_id*."""
        return service_id in self._registrations

    def initialized(self, service_id: str) -> bool:
        """Check if a singleton service has already been constructed."""
        reg = self._registrations.get(service_id)
        return reg is not None and reg.initialized

    def service_ids(self) -> list[str]:
        """Return all registered service ids, in registration order."""
        return list(self._registrations)

    def resolve(self, service_id: str) -> Any:
        """Resolve the service registered under *service_id*."""
        reg = self._registrations.get(service_id)
        if reg is None:
            raise NoSuchServiceError(
                service_id,
                suggestions=difflib.get_close_matches(service_id, self._registrations, n=5, cutoff=0.6),
            )

        if reg.initialized:
            return reg.instance

        assert reg.factory is not None
        instance = reg.factory()
        if reg.scope == Scope.SINGLETON:
            reg.instance = instance
            reg.initialized = True
        return instance
