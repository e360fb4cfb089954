"""Wire schemas: strict shapes for data arriving from outside.

Request bodies and catalog payloads are parsed into these models before
anything else looks at them. A payload that does not conform is rejected
as a whole; the rest of the pipeline only ever sees typed values.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from storefront.domain.model.catalog import Catalog
from storefront.domain.model.fabric import Fabric, FabricType
from storefront.domain.model.order import MAX_QUANTITY_PER_LINE, LineSelection
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.sanitize import sanitize_identifier, sanitize_notes


def _identifier(value: Any) -> str:
    cleaned = sanitize_identifier(value)
    if cleaned is None:
        raise ValueError("invalid identifier")
    return cleaned


def _optional_identifier(value: Any) -> str | None:
    if not value:
        return None
    return _identifier(value)


def _notes(value: Any) -> str | None:
    if not value:
        return None
    return sanitize_notes(value)


def _quantity(value: Any) -> int:
    # JSON numbers only; fractional quantities are floored.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("quantity must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("quantity must be finite")
    return math.floor(value)


Identifier = Annotated[str, BeforeValidator(_identifier)]
OptionalIdentifier = Annotated[str | None, BeforeValidator(_optional_identifier)]
Notes = Annotated[str | None, BeforeValidator(_notes)]
LineQuantity = Annotated[
    int, BeforeValidator(_quantity), Field(ge=1, le=MAX_QUANTITY_PER_LINE)
]


# ---------------------------------------------------------------------------
# Checkout request
# ---------------------------------------------------------------------------


class CheckoutItem(BaseModel):
    """One line of a checkout request.

    Unknown fields (a client-supplied ``price``, say) are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    product_id: Identifier = Field(alias="productId")
    quantity: LineQuantity
    selected_fabric: Identifier = Field(alias="selectedFabric")
    selected_lining: OptionalIdentifier = Field(default=None, alias="selectedLining")
    notes: Notes = None

    def to_selection(self) -> LineSelection:
        return LineSelection(
            product_ref=self.product_id,
            fabric_ref=self.selected_fabric,
            lining_ref=self.selected_lining,
            quantity=self.quantity,
            notes=self.notes,
        )


class CheckoutRequest(BaseModel):
    """The envelope. Items stay raw so each can be checked on its own."""

    items: list[Any]


# ---------------------------------------------------------------------------
# Catalog payload
# ---------------------------------------------------------------------------


class FabricPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    image: str = ""
    is_active: bool = Field(default=True, alias="isActive")

    def to_domain(self, fabric_type: FabricType) -> Fabric:
        return Fabric(
            id=self.id,
            name=self.name,
            image=self.image,
            type=fabric_type,
            is_active=self.is_active,
        )

    @staticmethod
    def from_domain(fabric: Fabric) -> FabricPayload:
        return FabricPayload(
            id=fabric.id, name=fabric.name, image=fabric.image, isActive=fabric.is_active
        )


class ProductPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    slug: str | None = None
    name: str
    description: str = ""
    price: int = Field(ge=0)
    currency: str = DEFAULT_CURRENCY
    stock: int = Field(default=0, ge=0)
    is_active: bool = Field(default=True, alias="isActive")
    available_fabrics: list[str] = Field(default_factory=list, alias="availableFabrics")
    available_inner_fabrics: list[str] = Field(
        default_factory=list, alias="availableInnerFabrics"
    )
    has_lining_option: bool = Field(default=False, alias="hasLiningOption")

    def to_domain(self) -> Product:
        return Product(
            id=self.slug or self.id,
            name=self.name,
            description=self.description,
            price=Money(self.price, self.currency.upper()),
            stock=self.stock,
            is_active=self.is_active,
            available_fabrics=tuple(self.available_fabrics),
            available_inner_fabrics=tuple(self.available_inner_fabrics),
            has_lining_option=self.has_lining_option,
        )

    @staticmethod
    def from_domain(product: Product) -> ProductPayload:
        return ProductPayload(
            id=product.id,
            slug=product.id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            currency=product.price.currency,
            stock=product.stock,
            isActive=product.is_active,
            availableFabrics=list(product.available_fabrics),
            availableInnerFabrics=list(product.available_inner_fabrics),
            hasLiningOption=product.has_lining_option,
        )


class FabricsPayload(BaseModel):
    outer: list[FabricPayload] = Field(default_factory=list)
    inner: list[FabricPayload] = Field(default_factory=list)


class CatalogPayload(BaseModel):
    """``{success, products, fabrics: {outer, inner}}`` as served to carts."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    products: list[ProductPayload] = Field(default_factory=list)
    fabrics: FabricsPayload = Field(default_factory=FabricsPayload)

    def to_domain(self) -> Catalog:
        fabrics = [f.to_domain(FabricType.OUTER) for f in self.fabrics.outer]
        fabrics += [f.to_domain(FabricType.INNER) for f in self.fabrics.inner]
        return Catalog.build([p.to_domain() for p in self.products], fabrics)

    @staticmethod
    def from_domain(catalog: Catalog) -> CatalogPayload:
        return CatalogPayload(
            success=True,
            products=[ProductPayload.from_domain(p) for p in catalog.products],
            fabrics=FabricsPayload(
                outer=[FabricPayload.from_domain(f) for f in catalog.outer_fabrics],
                inner=[FabricPayload.from_domain(f) for f in catalog.inner_fabrics],
            ),
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class CatalogSnapshotPayload(CatalogPayload):
    """The cached form: the catalog payload plus a fetch timestamp (epoch ms)."""

    timestamp: int
