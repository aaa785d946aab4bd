"""Observability probes for brands infrastructure."""

from brands.infrastructure.observability.connection_router_probe import (
    ConnectionRouterProbe,
    DefaultConnectionRouterProbe,
)
from brands.infrastructure.observability.repository_probe import (
    BrandRepositoryProbe,
    DefaultBrandRepositoryProbe,
)
from brands.infrastructure.observability.schema_probe import (
    DefaultSchemaManagerProbe,
    SchemaManagerProbe,
)

__all__ = [
    "BrandRepositoryProbe",
    "ConnectionRouterProbe",
    "DefaultBrandRepositoryProbe",
    "DefaultConnectionRouterProbe",
    "DefaultSchemaManagerProbe",
    "SchemaManagerProbe",
]
