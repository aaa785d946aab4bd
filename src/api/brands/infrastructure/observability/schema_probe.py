"""Domain probe for brand schema and role DDL.

Only identifiers are logged. Role passwords never reach the probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class SchemaManagerProbe(Protocol):
    """Domain probe for schema manager operations."""

    def schema_created(self, schema_name: str) -> None:
        ...

    def schema_dropped(self, schema_name: str) -> None:
        ...

    def role_created(self, role_name: str, schema_name: str) -> None:
        ...

    def role_dropped(self, role_name: str) -> None:
        ...

    def tables_created(self, schema_name: str, tables: list[str]) -> None:
        ...

    def owner_seeded(self, schema_name: str, user_id: str) -> None:
        ...

    def ddl_failed(self, operation: str, identifier: str, error: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> SchemaManagerProbe:
        ...


class DefaultSchemaManagerProbe:
    """Default implementation of SchemaManagerProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultSchemaManagerProbe:
        return DefaultSchemaManagerProbe(logger=self._logger, context=context)

    def schema_created(self, schema_name: str) -> None:
        self._logger.info(
            "brand_schema_created",
            schema_name=schema_name,
            **self._get_context_kwargs(),
        )

    def schema_dropped(self, schema_name: str) -> None:
        self._logger.info(
            "brand_schema_dropped",
            schema_name=schema_name,
            **self._get_context_kwargs(),
        )

    def role_created(self, role_name: str, schema_name: str) -> None:
        self._logger.info(
            "brand_role_created",
            role_name=role_name,
            schema_name=schema_name,
            **self._get_context_kwargs(),
        )

    def role_dropped(self, role_name: str) -> None:
        self._logger.info(
            "brand_role_dropped",
            role_name=role_name,
            **self._get_context_kwargs(),
        )

    def tables_created(self, schema_name: str, tables: list[str]) -> None:
        self._logger.info(
            "brand_tables_created",
            schema_name=schema_name,
            tables=tables,
            **self._get_context_kwargs(),
        )

    def owner_seeded(self, schema_name: str, user_id: str) -> None:
        self._logger.info(
            "brand_owner_seeded",
            schema_name=schema_name,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def ddl_failed(self, operation: str, identifier: str, error: str) -> None:
        self._logger.error(
            "brand_ddl_failed",
            operation=operation,
            identifier=identifier,
            error=error,
            **self._get_context_kwargs(),
        )
