"""
registry.py
-----------
Entity Schema Registry.

An EntitySchema ties one business entity together:

  model          SQLAlchemy table (TenantScopedMixin subclass); compound
                 uniqueness is declared on the table with UniqueConstraint
                 and enforced by the database at write time.
  create/update  Pydantic bodies for POST and PATCH/PUT.
  read           Pydantic response model.
  filter         Query-string filters accepted by the list endpoint.
  unknown_fields "forbid" rejects payload keys the entity does not declare,
                 "ignore" drops them. Chosen once per entity.

The registry is an explicit object handed to create_application(); there
is no import-time global list of entities.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Literal, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint

from backoffice.db.base import TenantScopedMixin
from backoffice.models import (
    Attachment,
    Challan,
    Control,
    EWayBill,
    Forecast,
    ItcRecord,
    TaxProvision,
    TaxRate,
)
from backoffice.schemas import (
    attachment,
    challan,
    control,
    eway_bill,
    forecast,
    itc_record,
    tax_provision,
    tax_rate,
)

UnknownFieldPolicy = Literal["forbid", "ignore"]


@dataclass(frozen=True)
class EntitySchema:
    name: str
    label: str
    path: str
    model: Type[TenantScopedMixin]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    read_schema: Type[BaseModel]
    filter_schema: Type[BaseModel]
    unknown_fields: UnknownFieldPolicy = "forbid"
    order_by: Tuple[str, ...] = ("created_at",)
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def unique_keys(self) -> Tuple[Tuple[str, ...], ...]:
        """Field tuples that must be unique within one tenant."""
        keys = []
        for constraint in self.model.__table__.constraints:
            if isinstance(constraint, UniqueConstraint):
                keys.append(tuple(c.name for c in constraint.columns if c.name != "tenant_id"))
        return tuple(keys)


class EntityRegistry:
    """Name-keyed set of EntitySchema entries."""

    def __init__(self) -> None:
        self._entities: Dict[str, EntitySchema] = {}

    def register(self, entity: EntitySchema) -> EntitySchema:
        if entity.name in self._entities:
            raise ValueError(f"Entity '{entity.name}' is already registered")
        if any(e.path == entity.path for e in self._entities.values()):
            raise ValueError(f"Path '{entity.path}' is already registered")
        if not issubclass(entity.model, TenantScopedMixin):
            raise ValueError(f"Entity '{entity.name}' model is not tenant scoped")
        if entity.unknown_fields not in ("forbid", "ignore"):
            raise ValueError("Unknown-field policy must be 'forbid' or 'ignore'")

        for constraint in entity.model.__table__.constraints:
            if isinstance(constraint, UniqueConstraint) and "tenant_id" not in constraint.columns:
                raise ValueError(
                    f"Unique constraint {constraint.name} on '{entity.name}' "
                    "must include tenant_id"
                )
        for column in entity.model.__table__.columns:
            if column.unique and column.name != "id":
                raise ValueError(
                    f"Column '{column.name}' on '{entity.name}' is globally unique; "
                    "declare a UniqueConstraint with tenant_id instead"
                )

        self._entities[entity.name] = entity
        return entity

    def get(self, name: str) -> EntitySchema:
        try:
            return self._entities[name]
        except KeyError:
            raise KeyError(f"No entity registered under '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[EntitySchema]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)


def build_default_registry() -> EntityRegistry:
    registry = EntityRegistry()

    # ── GST ──────────────────────────────────────────────────────────────
    registry.register(EntitySchema(
        name="tax_rate",
        label="Tax rate",
        path="/gst/tax-rates",
        model=TaxRate,
        create_schema=tax_rate.TaxRateCreate,
        update_schema=tax_rate.TaxRateUpdate,
        read_schema=tax_rate.TaxRateRead,
        filter_schema=tax_rate.TaxRateFilter,
        tags=("GST",),
    ))
    registry.register(EntitySchema(
        name="eway_bill",
        label="E-way bill",
        path="/gst/e-way-bills",
        model=EWayBill,
        create_schema=eway_bill.EWayBillCreate,
        update_schema=eway_bill.EWayBillUpdate,
        read_schema=eway_bill.EWayBillRead,
        filter_schema=eway_bill.EWayBillFilter,
        tags=("GST",),
    ))
    registry.register(EntitySchema(
        name="itc_record",
        label="ITC record",
        path="/gst/itc-records",
        model=ItcRecord,
        create_schema=itc_record.ItcRecordCreate,
        update_schema=itc_record.ItcRecordUpdate,
        read_schema=itc_record.ItcRecordRead,
        filter_schema=itc_record.ItcRecordFilter,
        tags=("GST",),
    ))
    registry.register(EntitySchema(
        name="challan",
        label="Challan",
        path="/gst/challans",
        model=Challan,
        create_schema=challan.ChallanCreate,
        update_schema=challan.ChallanUpdate,
        read_schema=challan.ChallanRead,
        filter_schema=challan.ChallanFilter,
        tags=("GST",),
    ))

    # ── CFO ──────────────────────────────────────────────────────────────
    registry.register(EntitySchema(
        name="forecast",
        label="Forecast",
        path="/cfo/forecasts",
        model=Forecast,
        create_schema=forecast.ForecastCreate,
        update_schema=forecast.ForecastUpdate,
        read_schema=forecast.ForecastRead,
        filter_schema=forecast.ForecastFilter,
        order_by=("period", "version"),
        tags=("CFO",),
    ))
    registry.register(EntitySchema(
        name="control",
        label="Control",
        path="/cfo/controls",
        model=Control,
        create_schema=control.ControlCreate,
        update_schema=control.ControlUpdate,
        read_schema=control.ControlRead,
        filter_schema=control.ControlFilter,
        tags=("CFO",),
    ))
    registry.register(EntitySchema(
        name="tax_provision",
        label="Tax provision",
        path="/cfo/tax-provisions",
        model=TaxProvision,
        create_schema=tax_provision.TaxProvisionCreate,
        update_schema=tax_provision.TaxProvisionUpdate,
        read_schema=tax_provision.TaxProvisionRead,
        filter_schema=tax_provision.TaxProvisionFilter,
        tags=("CFO",),
    ))

    # ── Accounting ───────────────────────────────────────────────────────
    # Extra keys posted by upload forms are dropped.
    registry.register(EntitySchema(
        name="attachment",
        label="Attachment",
        path="/accounting/attachments",
        model=Attachment,
        create_schema=attachment.AttachmentCreate,
        update_schema=attachment.AttachmentUpdate,
        read_schema=attachment.AttachmentRead,
        filter_schema=attachment.AttachmentFilter,
        unknown_fields="ignore",
        order_by=("-uploaded_at",),
        tags=("Accounting",),
    ))

    return registry
