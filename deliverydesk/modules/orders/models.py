"""
Orders View Models
==================

Transient view models rebuilt from each order-management API response.
Nothing here is persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from ...core.api_client import PAID

# Backend payment value set; anything else is styled as unknown
PAYMENT_BADGE_CLASSES = {
    'Paid': 'badge-paid',
    'Pending': 'badge-pending',
    'Failed': 'badge-failed',
    'Refunded': 'badge-refunded',
}

STATUS_BADGE_CLASSES = {
    'Delivered': 'badge-delivered',
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive local datetime (None if unparseable)."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_amount(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def format_amount(amount: Optional[Decimal]) -> str:
    if amount is None:
        return ''
    return f"₹{amount:.2f}"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ('' if value is None else str(value))


@dataclass
class Centre:
    name: str = ''
    centre_id: str = ''

    @classmethod
    def from_api(cls, data: Any) -> Optional['Centre']:
        if not isinstance(data, dict):
            return None
        return cls(name=_text(data.get('name')), centre_id=_text(data.get('centreId')))


@dataclass
class LineItem:
    quantity: int = 0
    product_name: str = ''

    @classmethod
    def from_api(cls, data: Any) -> 'LineItem':
        if not isinstance(data, dict):
            return cls()
        product = data.get('product')
        name = product.get('name') if isinstance(product, dict) else None
        try:
            quantity = int(data.get('quantity') or 0)
        except (TypeError, ValueError):
            quantity = 0
        return cls(quantity=quantity, product_name=_text(name))


@dataclass
class Order:
    id: str
    order_no: str = ''
    centre: Optional[Centre] = None
    products: List[LineItem] = field(default_factory=list)
    total_amount: Optional[Decimal] = None
    status: str = ''
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Order':
        products = data.get('products')
        payment_status = data.get('paymentStatus')
        return cls(
            id=_text(data.get('_id') or data.get('id')),
            order_no=_text(data.get('orderNo')),
            centre=Centre.from_api(data.get('centreId')),
            products=[LineItem.from_api(p) for p in products] if isinstance(products, list) else [],
            total_amount=parse_amount(data.get('totalAmount')),
            status=_text(data.get('status')),
            payment_status=payment_status if isinstance(payment_status, str) else None,
            created_at=parse_timestamp(data.get('createdAt')),
        )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAID

    @property
    def short_no(self) -> str:
        return self.order_no[-3:]

    @property
    def item_count(self) -> int:
        return len(self.products)

    @property
    def product_summary(self) -> str:
        return ', '.join(p.product_name for p in self.products if p.product_name)

    @property
    def payment_label(self) -> str:
        return self.payment_status or 'Unknown'

    @property
    def payment_badge(self) -> str:
        return PAYMENT_BADGE_CLASSES.get(self.payment_status, 'badge-unknown')

    @property
    def status_badge(self) -> str:
        return STATUS_BADGE_CLASSES.get(self.status, 'badge-unknown')

    @property
    def amount_display(self) -> str:
        return format_amount(self.total_amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'order_no': self.order_no,
            'centre': {'name': self.centre.name, 'centre_id': self.centre.centre_id} if self.centre else None,
            'products': [{'quantity': p.quantity, 'product_name': p.product_name} for p in self.products],
            'total_amount': str(self.total_amount) if self.total_amount is not None else None,
            'amount_display': self.amount_display,
            'status': self.status,
            'payment_status': self.payment_status,
            'is_paid': self.is_paid,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class OrderDetails:
    """Narrow projection of an order fetched by the receipt dialog."""
    id: str
    order_no: str = ''
    total_amount: Optional[Decimal] = None
    payment_status: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any], order_id: str = '') -> 'OrderDetails':
        payment_status = data.get('paymentStatus')
        return cls(
            id=_text(data.get('_id') or data.get('id') or order_id),
            order_no=_text(data.get('orderNo')),
            total_amount=parse_amount(data.get('totalAmount')),
            payment_status=payment_status if isinstance(payment_status, str) else None,
        )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAID

    @property
    def amount_display(self) -> str:
        return format_amount(self.total_amount)

    @property
    def payment_label(self) -> str:
        return self.payment_status or 'Unknown'

    @property
    def payment_badge(self) -> str:
        return PAYMENT_BADGE_CLASSES.get(self.payment_status, 'badge-unknown')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'order_no': self.order_no,
            'total_amount': str(self.total_amount) if self.total_amount is not None else None,
            'amount_display': self.amount_display,
            'payment_status': self.payment_status,
            'is_paid': self.is_paid,
        }
