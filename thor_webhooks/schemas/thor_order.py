from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ThorModel(BaseModel):
    # Admin API uses camelCase; ignore fields we do not read
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Money(_ThorModel):
    cent_amount: int = Field(..., alias="centAmount")
    currency_code: str = Field(..., alias="currencyCode")


class UnitPrice(_ThorModel):
    value: Money


class Image(_ThorModel):
    src: str


class Variant(_ThorModel):
    image: Optional[Image] = None


class LineItem(_ThorModel):
    product_name: str = Field(..., alias="productName")
    quantity: int
    variant: Optional[Variant] = None
    unit_price: UnitPrice = Field(..., alias="unitPrice")


class LineItemConnection(_ThorModel):
    nodes: List[LineItem] = []


class ShippingLine(_ThorModel):
    total: Money


class Address(_ThorModel):
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = Field(None, alias="postalCode")
    country_code: Optional[str] = Field(None, alias="countryCode")


class Customer(_ThorModel):
    email: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")


class ThorOrder(_ThorModel):
    """Order as returned by the Thor Commerce Admin API ``order`` query."""

    id: str
    order_number: int = Field(..., alias="orderNumber")
    payment_state: Optional[str] = Field(None, alias="paymentState")
    shipment_state: Optional[str] = Field(None, alias="shipmentState")
    customer: Customer
    shipping_address: Optional[Address] = Field(None, alias="shippingAddress")
    billing_address: Optional[Address] = Field(None, alias="billingAddress")
    line_items: LineItemConnection = Field(default_factory=LineItemConnection, alias="lineItems")
    subtotal: Money
    shipping_lines: List[ShippingLine] = Field(default_factory=list, alias="shippingLines")
    total: Money
