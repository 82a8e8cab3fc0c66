"""BaseService — abstract foundation for tiresolve services.

Every service receives the frozen :class:`TiSettings` at construction
time and builds its :class:`TerminfoResolver` lazily from the
``[search]`` section.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tiresolve.config.settings import TiSettings
    from tiresolve.services.search import TerminfoResolver

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve(self, name: str) -> ServiceResult:
                outcome = self.resolver.resolve(name)
                ...
    """

    def __init__(
        self,
        settings: TiSettings,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings
        self._environ = environ
        self._resolver: TerminfoResolver | None = None

    @property
    def resolver(self) -> TerminfoResolver:
        """The resolver instance (created lazily on first access)."""
        if self._resolver is None:
            from tiresolve.services.search import TerminfoResolver

            logger.debug("Search fallback list: %s", self._settings.search.terminfo_dirs)
            self._resolver = TerminfoResolver(self._settings.search, environ=self._environ)
        return self._resolver
