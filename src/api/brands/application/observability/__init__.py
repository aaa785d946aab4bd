"""Observability probes for the brands application layer."""

from brands.application.observability.brand_access_probe import (
    BrandAccessProbe,
    DefaultBrandAccessProbe,
)
from brands.application.observability.deletion_probe import (
    CascadeDeletionProbe,
    DefaultCascadeDeletionProbe,
)
from brands.application.observability.provisioning_probe import (
    BrandProvisioningProbe,
    DefaultBrandProvisioningProbe,
)
from brands.application.observability.saga_probe import DefaultSagaProbe, SagaProbe

__all__ = [
    "BrandAccessProbe",
    "BrandProvisioningProbe",
    "CascadeDeletionProbe",
    "DefaultBrandAccessProbe",
    "DefaultBrandProvisioningProbe",
    "DefaultCascadeDeletionProbe",
    "DefaultSagaProbe",
    "SagaProbe",
]
