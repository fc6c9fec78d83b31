from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class _EnvelopeModel(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    @property
    def model_extra(self) -> Optional[Mapping[str, Any]]:
        """
        Undeclared fields as a read-only view.

        Only the top level of the view is read-only; nested JSON objects
        inside an extra value are plain dicts.
        """
        extra = self.__pydantic_extra__
        if extra is None:
            return None
        return MappingProxyType(extra)


class WebhookSubject(_EnvelopeModel):
    """The resource an event is about. Unknown fields are kept as extras."""

    resource_id: str = Field(..., alias="id", min_length=1, description="Resource ID (e.g., order_01kc4gj6...)")


class WebhookEventData(_EnvelopeModel):
    subject: WebhookSubject = Field(..., alias="object")


class ThorWebhookEvent(_EnvelopeModel):
    """
    A decoded Thor Commerce webhook delivery.

    Field names follow Python conventions; the wire names are kept as aliases
    so ``model_dump(by_alias=True)`` reproduces the original document,
    including any fields this model does not declare.
    """

    id: str = Field(..., min_length=1, description="Webhook event ID (e.g., whr_01kc4gj71aexas8x0m022enwth)")
    object_tag: Literal["event"] = Field(..., alias="object")
    created_at: StrictInt = Field(..., alias="created", description="Unix timestamp (seconds)")
    idempotency_key: str = Field(..., min_length=1, description="Shared by every delivery of the same occurrence")
    data: WebhookEventData
    event_type: str = Field(..., alias="type", min_length=1, description="Event type (e.g., order.created)")

    @field_validator("idempotency_key")
    @classmethod
    def validate_idempotency_key(cls, v: str) -> str:
        # Canonical 8-4-4-4-12 form only, but keep the sender's letter case
        if str(UUID(v)) != v.lower():
            raise ValueError("idempotency_key must be a hyphenated UUID")
        return v

    @property
    def subject(self) -> WebhookSubject:
        return self.data.subject

    @property
    def resource_id(self) -> str:
        return self.data.subject.resource_id
