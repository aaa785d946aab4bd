"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.principal_service_probe import (
    DefaultPrincipalServiceProbe,
    PrincipalServiceProbe,
)

__all__ = [
    "DefaultPrincipalServiceProbe",
    "PrincipalServiceProbe",
]
