"""
Order Analytics
===============

Aggregates the full order list in memory: orders and revenue per
year-month, and orders per payment method. The summaries keep the first
occurrence order of each key; the monthly charts run oldest month first.
"""

import math

UNKNOWN = 'Unknown'

PAYMENT_COLORS = ['#f97316', '#3b82f6', '#ef4444', '#10b981', '#a855f7']


def month_key(order):
    """'2025-01' from a timestamp like '2025-01-15T10:00:00Z'; 'Unknown' if absent"""
    timestamp = order.get('timestamp')
    return str(timestamp)[:7] if timestamp else UNKNOWN


def _price(order):
    try:
        price = float(order.get('price') or 0)
    except (TypeError, ValueError):
        return 0
    return price if math.isfinite(price) else 0


def orders_per_month(orders):
    counts = {}
    for order in orders:
        key = month_key(order)
        counts[key] = counts.get(key, 0) + 1
    return counts


def revenue_per_month(orders):
    revenue = {}
    for order in orders:
        key = month_key(order)
        revenue[key] = revenue.get(key, 0) + _price(order)
    return revenue


def orders_per_payment_method(orders):
    counts = {}
    for order in orders:
        key = order.get('paymentMethod') or UNKNOWN
        counts[key] = counts.get(key, 0) + 1
    return counts


def summarize(orders):
    return {
        'by_month': orders_per_month(orders),
        'revenue_by_month': revenue_per_month(orders),
        'by_payment': orders_per_payment_method(orders),
    }


def chronological(by_month):
    """Month buckets oldest first, with the Unknown bucket last"""
    months = sorted(by_month, key=lambda key: (key == UNKNOWN, key))
    return {month: by_month[month] for month in months}


def chart_data(summary):
    """Chart.js-shaped data for the bar, line and pie charts"""
    by_month = chronological(summary['by_month'])
    revenue = chronological(summary['revenue_by_month'])
    by_payment = summary['by_payment']

    return {
        'orders_per_month': {
            'type': 'bar',
            'labels': list(by_month),
            'datasets': [{'label': 'Orders', 'data': list(by_month.values()),
                          'backgroundColor': '#3b82f6'}],
        },
        'revenue_per_month': {
            'type': 'line',
            'labels': list(revenue),
            'datasets': [{'label': 'Revenue (₹)', 'data': list(revenue.values()),
                          'borderColor': '#10b981', 'backgroundColor': '#6ee7b7',
                          'tension': 0.3}],
        },
        'payment_methods': {
            'type': 'pie',
            'labels': list(by_payment),
            'datasets': [{'data': list(by_payment.values()),
                          'backgroundColor': PAYMENT_COLORS}],
        },
    }
