"""Application services for the brands bounded context."""

from brands.application.services.brand_authentication_service import (
    BrandAuthenticationService,
    BrandSession,
)
from brands.application.services.brand_data_service import BrandDataService
from brands.application.services.brand_service import BrandService
from brands.application.services.cascade_deletion_service import CascadeDeletionService

__all__ = [
    "BrandAuthenticationService",
    "BrandDataService",
    "BrandService",
    "BrandSession",
    "CascadeDeletionService",
]
