"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the social bounded context.
"""

from pytest_archon import archrule


class TestSocialDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        Aggregates and the privacy engine are pure and never touch the
        record store.
        """
        (
            archrule("domain_no_infrastructure")
            .match("social.domain*")
            .should_not_import("social.infrastructure*", "infrastructure*")
            .check("social")
        )

    def test_domain_does_not_import_application(self):
        (
            archrule("domain_no_application")
            .match("social.domain*")
            .should_not_import("social.application*")
            .check("social")
        )

    def test_domain_does_not_import_fastapi(self):
        """Domain objects should be framework-agnostic."""
        (
            archrule("domain_no_fastapi")
            .match("social.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check("social")
        )


class TestSocialPortsLayerBoundaries:
    def test_ports_does_not_import_infrastructure(self):
        (
            archrule("ports_no_infrastructure")
            .match("social.ports*")
            .should_not_import("social.infrastructure*", "infrastructure*")
            .check("social")
        )

    def test_ports_does_not_import_application(self):
        (
            archrule("ports_no_application")
            .match("social.ports*")
            .should_not_import("social.application*")
            .check("social")
        )


class TestSocialApplicationLayerBoundaries:
    def test_application_does_not_import_infrastructure(self):
        """Application services depend on repository ports, not adapters."""
        (
            archrule("application_no_infrastructure")
            .match("social.application*")
            .should_not_import("social.infrastructure*", "infrastructure*")
            .check("social")
        )

    def test_application_does_not_import_fastapi(self):
        (
            archrule("application_no_fastapi")
            .match("social.application*")
            .should_not_import("fastapi*", "starlette*")
            .check("social")
        )


class TestSocialInfrastructureLayerBoundaries:
    def test_infrastructure_does_not_import_application(self):
        """Infrastructure is used BY the application layer, not vice versa."""
        (
            archrule("infrastructure_no_application")
            .match("social.infrastructure*")
            .should_not_import("social.application*")
            .check("social")
        )


class TestDependencyLayerBoundaries:
    def test_infrastructure_dependencies_does_not_import_social(self):
        """Infrastructure dependencies should not import bounded contexts."""
        (
            archrule("infrastructure_deps_no_social")
            .match("infrastructure.dependencies*")
            .should_not_import("social*")
            .check("infrastructure")
        )
