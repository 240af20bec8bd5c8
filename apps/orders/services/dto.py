"""Plain data carried between the HTTP layer, the validator and the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class OrderItemRequest:
    """One cart line as the client sent it."""

    dish_token: str
    quantity: int
    special_instructions: str = ''


@dataclass(frozen=True)
class FulfillmentDetails:
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderRequest:
    """A cart addressed to one seller membership."""

    seller_membership_token: str
    items: tuple[OrderItemRequest, ...] = ()
    special_instructions: str = ''
    fulfillment_schedule_type: str = 'asap'
    fulfillment_date: Optional[str] = None
    fulfillment_method: str = 'dine_in'
    fulfillment_details: FulfillmentDetails = field(default_factory=FulfillmentDetails)

    @classmethod
    def from_payload(cls, data: dict) -> OrderRequest:
        """Build from serializer-validated data."""
        details = data.get('fulfillment_details') or {}
        return cls(
            seller_membership_token=str(data['seller_membership_token']),
            items=tuple(
                OrderItemRequest(
                    dish_token=str(item['dish_token']),
                    quantity=item['quantity'],
                    special_instructions=item.get('special_instructions') or '',
                )
                for item in data.get('items', [])
            ),
            special_instructions=data.get('special_instructions') or '',
            fulfillment_schedule_type=data.get('fulfillment_schedule_type') or 'asap',
            fulfillment_date=data.get('fulfillment_date'),
            fulfillment_method=data.get('fulfillment_method') or 'dine_in',
            fulfillment_details=FulfillmentDetails(**details),
        )


@dataclass
class ValidatedOrderItem:
    """Cart line bound to a dish, priced at validation time."""

    dish: Any
    quantity: int
    special_instructions: str
    price: int

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def snapshot(self) -> dict:
        return {
            'dish_token': str(self.dish.uuid),
            'dish_name': self.dish.name,
            'quantity': self.quantity,
            'special_instructions': self.special_instructions,
            'price': self.price,
        }


@dataclass
class ValidatedOrder:
    """Everything needed to preview or commit an order."""

    buyer: Any
    buyer_membership: Any
    seller_membership: Any
    items: list[ValidatedOrderItem]
    special_instructions: str
    fulfillment_schedule_type: str
    fulfillment_date: Optional[datetime]
    fulfillment_method: str
    fulfillment_details: dict

    @property
    def total(self) -> int:
        return sum(item.line_total for item in self.items)
