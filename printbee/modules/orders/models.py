"""
Order Rules
===========

Field names, enumerations and validation for print orders. Orders are
stored by the external store; this module only checks and reshapes the
dicts that travel to and from it. Used by the proxy routes and the client.
"""

import math
from datetime import datetime, timezone

JOB_STATUSES = ('Pending', 'In Progress', 'Finished')
DEFAULT_JOB_STATUS = 'Pending'

PAYMENT_METHODS = ('Cash', 'UPI', 'Card', 'Online')

# Wire names, as the store expects them
REQUIRED_FIELDS = ('name', 'email', 'phone', 'pickupTime', 'description', 'paymentMethod')

FIELD_LABELS = {
    'name': 'Name',
    'email': 'Email',
    'phone': 'Phone',
    'pickupTime': 'Pickup time',
    'description': 'Description',
    'paymentMethod': 'Payment method',
}

# Older rows carry comma separated links under these keys
LEGACY_FILE_KEYS = ('fileUrl', 'fileLink', 'link')


class ValidationError(ValueError):
    """Input rejected before any network call. The message is user-facing."""


def validate_price(value):
    """Return the price as a float; reject blanks, non-numbers and negatives."""
    if value is None or isinstance(value, bool):
        raise ValidationError('Price must be a valid number >= 0')
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError('Price must be a valid number >= 0')
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError('Price must be a valid number >= 0')
    if not math.isfinite(price) or price < 0:
        raise ValidationError('Price must be a valid number >= 0')
    return price


def validate_job_status(value):
    if value not in JOB_STATUSES:
        raise ValidationError('Job status must be Pending, In Progress, or Finished')
    return value


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def has_attachment(fields):
    files = fields.get('files')
    if isinstance(files, list) and files:
        return True
    return not _is_blank(fields.get('link'))


def validate_order_fields(fields, require_attachment=True):
    """
    Check an order body before it is sent to the store.

    Args:
        fields (dict): order body using wire names
        require_attachment (bool): public submissions must carry files or a link;
            manual admin orders need not

    Raises:
        ValidationError: on the first problem found
    """
    if not isinstance(fields, dict):
        raise ValidationError('Order details are required')

    missing = [FIELD_LABELS[f] for f in REQUIRED_FIELDS if _is_blank(fields.get(f))]
    if missing:
        raise ValidationError(f"Please fill in all required fields: {', '.join(missing)}")

    if fields['paymentMethod'] not in PAYMENT_METHODS:
        raise ValidationError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")

    if not _is_blank(fields.get('price')):
        validate_price(fields['price'])

    if 'jobStatus' in fields:
        validate_job_status(fields['jobStatus'])

    if require_attachment and not has_attachment(fields):
        raise ValidationError('Please attach at least one file or provide a link')


def file_references(order):
    """All file URLs of an order, whichever key the store used for them."""
    files = order.get('files')
    if isinstance(files, list) and files:
        urls = [f.get('url', '') if isinstance(f, dict) else f for f in files]
        return [str(u).strip() for u in urls if u and str(u).strip()]

    for key in LEGACY_FILE_KEYS:
        value = order.get(key)
        if isinstance(value, str) and value.strip():
            return [part.strip() for part in value.split(',') if part.strip()]
    return []


def normalize_order(raw):
    """Canonical order dict: file references always under ``files``."""
    order = {k: v for k, v in raw.items() if k not in LEGACY_FILE_KEYS}
    order['files'] = file_references(raw)
    if not order.get('jobStatus'):
        order['jobStatus'] = DEFAULT_JOB_STATUS
    return order


def parse_timestamp(value):
    """Aware datetime for an ISO 8601 timestamp, None if it is not one. Naive values are UTC."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def newest_first(orders):
    """
    Present orders newest first.

    The store appends rows, so its native order is oldest first. Rows with a
    parseable timestamp are sorted on the instant it names, newest first;
    the rest follow in reversed store order.
    """
    ordered = list(reversed(orders))
    moments = [parse_timestamp(o.get('timestamp')) for o in ordered]
    dated = [(m, o) for m, o in zip(moments, ordered) if m is not None]
    undated = [o for m, o in zip(moments, ordered) if m is None]
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [o for _, o in dated] + undated
