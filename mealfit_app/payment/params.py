"""Parsing of payment provider redirect parameters."""

from collections.abc import Mapping
from typing import Optional, Union
from urllib.parse import parse_qs

from ..errors import MissingParametersError
from .models import PaymentRedirectParams, PaymentStatus

# Alternative spellings, in lookup order
STATUS_KEYS = ("collection_status", "status")
PAYMENT_ID_KEYS = ("collection_id", "payment_id")
EXTERNAL_REFERENCE_KEYS = ("external_reference",)

QueryInput = Union[str, Mapping]


def _normalize_query(query: QueryInput) -> dict[str, str]:
    """Flatten a query string or mapping into single string values."""
    if isinstance(query, str):
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items() if values}

    result = {}
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is not None:
            result[key] = str(value)
    return result


def first_present(values: Mapping, keys: tuple) -> Optional[str]:
    """Return the first non-empty value among keys."""
    for key in keys:
        value = values.get(key)
        if value:
            return value
    return None


def parse_redirect_params(query: QueryInput) -> PaymentRedirectParams:
    """
    Parse redirect parameters from the provider return URL.

    Args:
        query: Raw query string (with or without leading '?') or a mapping
            of parameter names to values

    Returns:
        Parsed, immutable redirect parameters

    Raises:
        MissingParametersError: If status, payment id or external reference
            is absent or empty
    """
    values = _normalize_query(query)

    status = first_present(values, STATUS_KEYS)
    payment_id = first_present(values, PAYMENT_ID_KEYS)
    external_reference = first_present(values, EXTERNAL_REFERENCE_KEYS)

    missing = [
        name for name, value in (
            ("status", status),
            ("payment_id", payment_id),
            ("external_reference", external_reference),
        ) if not value
    ]
    if missing:
        raise MissingParametersError(missing_fields=missing)

    return PaymentRedirectParams(
        status=PaymentStatus.from_raw(status),
        payment_id=payment_id,
        external_reference=external_reference,
        raw_status=status,
    )


def peek_status(query: QueryInput) -> PaymentStatus:
    """Status for display purposes, tolerant of missing parameters."""
    return PaymentStatus.from_raw(first_present(_normalize_query(query), STATUS_KEYS))
