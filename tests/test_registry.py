from dataclasses import FrozenInstanceError, replace

import pytest
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from backoffice.db.base import TenantScopedMixin
from backoffice.models import Tenant
from backoffice.registry import EntityRegistry, EntitySchema, build_default_registry
from backoffice.schemas import tax_rate


# Kept off the application metadata so create_all never sees them.
class ScratchBase(DeclarativeBase):
    pass


class GloballyUniqueCode(ScratchBase, TenantScopedMixin):
    __tablename__ = "test_globally_unique_codes"

    code: Mapped[str] = mapped_column(String(20), unique=True)


class NonCompoundUnique(ScratchBase, TenantScopedMixin):
    __tablename__ = "test_non_compound_uniques"
    __table_args__ = (UniqueConstraint("code"),)

    code: Mapped[str] = mapped_column(String(20))


def _entity(**overrides) -> EntitySchema:
    base = build_default_registry().get("tax_rate")
    return replace(base, **overrides)


def test_default_registry_has_every_entity():
    registry = build_default_registry()

    assert len(registry) == 8
    assert [e.name for e in registry] == [
        "tax_rate",
        "eway_bill",
        "itc_record",
        "challan",
        "forecast",
        "control",
        "tax_provision",
        "attachment",
    ]
    assert "challan" in registry
    assert "invoice" not in registry


def test_unique_keys_exclude_tenant_id():
    registry = build_default_registry()

    assert registry.get("tax_rate").unique_keys == ()
    assert registry.get("eway_bill").unique_keys == (("bill_no",),)
    assert registry.get("forecast").unique_keys == (("period", "version"),)
    assert registry.get("tax_provision").unique_keys == (("period", "entity"),)


def test_unknown_field_policies():
    registry = build_default_registry()

    assert registry.get("attachment").unknown_fields == "ignore"
    assert registry.get("tax_rate").unknown_fields == "forbid"


def test_get_unknown_entity_raises_key_error():
    with pytest.raises(KeyError):
        build_default_registry().get("invoice")


def test_register_rejects_duplicates():
    registry = EntityRegistry()
    registry.register(_entity())

    with pytest.raises(ValueError):
        registry.register(_entity(path="/gst/other"))
    with pytest.raises(ValueError):
        registry.register(_entity(name="other"))


def test_register_rejects_bad_policy():
    with pytest.raises(ValueError):
        EntityRegistry().register(_entity(unknown_fields="drop"))


def test_register_rejects_unscoped_model():
    with pytest.raises(ValueError):
        EntityRegistry().register(_entity(model=Tenant))


@pytest.mark.parametrize("model", [GloballyUniqueCode, NonCompoundUnique])
def test_register_rejects_uniqueness_without_tenant(model):
    entity = EntitySchema(
        name="code",
        label="Code",
        path="/codes",
        model=model,
        create_schema=tax_rate.TaxRateCreate,
        update_schema=tax_rate.TaxRateUpdate,
        read_schema=tax_rate.TaxRateRead,
        filter_schema=tax_rate.TaxRateFilter,
    )

    with pytest.raises(ValueError):
        EntityRegistry().register(entity)


def test_entity_schema_is_frozen():
    entity = _entity()

    with pytest.raises(FrozenInstanceError):
        entity.name = "renamed"  # type: ignore[misc]
