"""
Email template rendering with Jinja2.

Templates live in the package's ``templates`` directory and are addressed by
name (``order-confirmation`` -> ``order_confirmation.html``).
"""

from typing import Any, Dict, List, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel

from thor_webhooks.core.exceptions import ConfigurationError

TEMPLATES: Dict[str, str] = {
    "order-confirmation": "order_confirmation.html",
}

_env = Environment(
    loader=PackageLoader("thor_webhooks", "templates"),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
)


class Price(BaseModel):
    value: str
    currency_code: str


class EmailAddress(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None


class EmailLineItem(BaseModel):
    name: str
    quantity: int
    unit_price: Price
    image_url: Optional[str] = None


class OrderConfirmationData(BaseModel):
    order_number: str
    shipping_address: EmailAddress
    billing_address: EmailAddress
    line_items: List[EmailLineItem]
    subtotal: Price
    shipping_price: Price
    total: Price


def render_email_template(template_name: str, data: Any) -> str:
    """
    Render a named email template.

    Args:
        template_name: Key in TEMPLATES
        data: A pydantic model or a plain mapping of template variables

    Raises:
        ConfigurationError: If no template is registered under template_name
    """
    filename = TEMPLATES.get(template_name)
    if filename is None:
        raise ConfigurationError(
            f"Email template not found: {template_name}. Available: {', '.join(sorted(TEMPLATES))}"
        )
    context = data.model_dump() if isinstance(data, BaseModel) else dict(data)
    return _env.get_template(filename).render(**context)
