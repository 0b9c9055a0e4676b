"""Unit tests for the error hierarchy."""

from gatehouse.domain.shared.error import (
    ConfigurationError,
    DomainError,
    GatehouseError,
    InfrastructureError,
    ValidationError,
)


class TestErrorCodes:
    def test_default_code_is_class_name(self):
        error = ConfigurationError("bad config")

        assert error.code == "ConfigurationError"
        assert error.message == "bad config"
        assert str(error) == "bad config"

    def test_explicit_code(self):
        assert ConfigurationError("x", code="principal_store_missing").code == (
            "principal_store_missing"
        )

    def test_hierarchy_and_status(self):
        assert issubclass(ValidationError, DomainError)
        assert issubclass(ConfigurationError, InfrastructureError)
        assert issubclass(DomainError, GatehouseError)
        assert ValidationError("x").status_code == 422
        assert ConfigurationError("x").status_code == 503


class TestValidationError:
    def test_details_by_field(self):
        error = ValidationError("taken", field="name", codes=["uniqueness"])

        assert error.code == "VALIDATION_ERROR"
        assert error.details == {"codes": {"name": ["uniqueness"]}}

    def test_details_without_field(self):
        assert ValidationError("bad").details == {"codes": {}}
