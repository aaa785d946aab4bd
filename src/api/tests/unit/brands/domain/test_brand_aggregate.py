"""Unit tests for the Brand aggregate and brand-local records."""

from brands.domain.aggregates import Brand, BrandUser
from brands.domain.value_objects import BrandId, BrandName, BrandRole
from iam.domain.value_objects import PrincipalId


def _brand(**overrides) -> Brand:
    kwargs = {
        "name": BrandName.parse("Acme"),
        "owner_id": PrincipalId.generate(),
        "encrypted_password": "cipher-text",
    }
    kwargs.update(overrides)
    return Brand.create(**kwargs)


class TestBrandCreation:
    def test_new_brand_is_inactive(self):
        assert not _brand().is_active

    def test_names_derive_from_id(self):
        brand_id = BrandId.generate()

        brand = _brand(brand_id=brand_id)

        assert brand.id == brand_id
        assert brand.schema_name == brand_id.schema_name
        assert brand.database_user == brand_id.database_user

    def test_same_display_name_gives_different_namespaces(self):
        first, second = _brand(), _brand()

        assert first.name == second.name
        assert first.schema_name != second.schema_name
        assert first.database_user != second.database_user

    def test_encrypted_password_not_in_repr(self):
        assert "cipher-text" not in repr(_brand())


class TestBrandLifecycle:
    def test_activate_and_deactivate(self):
        brand = _brand()

        brand.activate()
        assert brand.is_active

        brand.deactivate()
        assert not brand.is_active

    def test_rename(self):
        brand = _brand()

        brand.rename(BrandName.parse("Acme Two"))

        assert brand.name == "Acme Two"

    def test_ownership(self):
        owner = PrincipalId.generate()
        brand = _brand(owner_id=owner)

        assert brand.is_owned_by(owner)
        assert not brand.is_owned_by(PrincipalId.generate())

    def test_confirmation_phrase(self):
        brand = _brand()

        assert brand.confirmation_phrase == f"DELETE {brand.id.value}"


class TestBrandUser:
    def test_create_owner(self):
        user = BrandUser.create_owner("K" * 16, "hash", "Acme Owner")

        assert user.has_role(BrandRole.OWNER)
        assert not user.has_role(BrandRole.OPERATOR)
        assert user.is_active
        assert user.sorted_roles() == ["Owner"]
        assert "hash" not in repr(user)
