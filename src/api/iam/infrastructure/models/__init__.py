"""SQLAlchemy ORM models for IAM bounded context.

These models map to registry tables and are used by repository implementations.
"""

from iam.infrastructure.models.principal import PrincipalModel, PrincipalRoleModel

__all__ = [
    "PrincipalModel",
    "PrincipalRoleModel",
]
