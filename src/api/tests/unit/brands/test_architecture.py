"""Architecture tests for the brands bounded context.

The domain layer only knows value objects and aggregates. Ports describe
what the application needs without naming the database that provides it.
"""

from pytest_archon import archrule


class TestBrandsDomainLayerBoundaries:
    """Tests that the brands domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        (
            archrule("brands_domain_no_infrastructure")
            .match("brands.domain*")
            .should_not_import("brands.infrastructure*", "infrastructure*")
            .check("brands")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("brands_domain_no_application")
            .match("brands.domain*")
            .should_not_import("brands.application*", "brands.presentation*")
            .check("brands")
        )

    def test_domain_does_not_import_frameworks(self):
        (
            archrule("brands_domain_no_frameworks")
            .match("brands.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("brands")
        )


class TestBrandsPortBoundaries:
    def test_ports_do_not_import_infrastructure(self):
        (
            archrule("brands_ports_no_infrastructure")
            .match("brands.ports*")
            .should_not_import("brands.infrastructure*", "infrastructure*")
            .check("brands")
        )

    def test_application_does_not_import_presentation(self):
        """Services are reachable from routes, never the reverse."""
        (
            archrule("brands_application_no_presentation")
            .match("brands.application*")
            .should_not_import("brands.presentation*", "fastapi*")
            .check("brands")
        )
