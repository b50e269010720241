"""
Order Filters
=============

Search, payment-status and date-range filtering over an in-memory list of
orders. Criteria travel in the list page's query string so that links to the
receipt dialog and back can carry them.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from ...core.api_client import PAID

UNPAID = 'Unpaid'
PAYMENT_FILTERS = (PAID, UNPAID)

DATE_FILTERS = {
    'today': 'Today',
    'week': 'Last 7 days',
    'month': 'Last 30 days',
}


@dataclass(frozen=True)
class FilterCriteria:
    search: str = ''
    payment: str = ''
    date: str = ''

    @classmethod
    def from_args(cls, args):
        """Build criteria from request args; unknown values are treated as unset."""
        search = (args.get('q') or '').strip()
        payment = args.get('payment') or ''
        date = args.get('date') or ''
        return cls(
            search=search,
            payment=payment if payment in PAYMENT_FILTERS else '',
            date=date if date in DATE_FILTERS else '',
        )

    @property
    def has_active_filters(self):
        return bool(self.search or self.payment or self.date)

    def to_query(self):
        """Only the criteria that are set, keyed by query parameter name."""
        query = {}
        if self.search:
            query['q'] = self.search
        if self.payment:
            query['payment'] = self.payment
        if self.date:
            query['date'] = self.date
        return query


CLEARED = FilterCriteria()


def matches_search(order, term):
    if not term:
        return True
    needle = term.lower()
    haystack = [order.order_no]
    if order.centre:
        haystack.extend([order.centre.name, order.centre.centre_id])
    haystack.extend(p.product_name for p in order.products)
    return any(needle in (value or '').lower() for value in haystack)


def matches_payment(order, payment):
    if payment == PAID:
        return order.payment_status == PAID
    if payment == UNPAID:
        return order.payment_status != PAID
    return True


def date_lower_bound(date_filter, now):
    """Earliest creation time kept by a date filter, or None for no bound."""
    if date_filter == 'today':
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_filter == 'week':
        return now - timedelta(days=7)
    if date_filter == 'month':
        return now - timedelta(days=30)
    return None


def filter_orders(orders, criteria, now=None):
    """
    Apply search, payment and date criteria (combined with AND).

    Args:
        orders: list of Order
        criteria: FilterCriteria
        now: naive local datetime used for date buckets (defaults to datetime.now())

    Returns:
        New list holding the matching orders in their original order
    """
    lower_bound = date_lower_bound(criteria.date, now or datetime.now())

    result = []
    for order in orders:
        if not matches_search(order, criteria.search):
            continue
        if not matches_payment(order, criteria.payment):
            continue
        if lower_bound is not None:
            if order.created_at is None or order.created_at < lower_bound:
                continue
        result.append(order)
    return result
