"""
Decoder for ENTSO-E publication documents.
Turns the day-ahead price XML into an ordered list of PricePoint objects.
"""

import math
from datetime import timedelta
from typing import List, Optional
from xml.etree import ElementTree as ET

from src.exceptions import DecodeError
from src.models.price import PricePoint
from src.utils.time_utils import parse_utc_datetime

PUBLICATION_DOCUMENT = "Publication_MarketDocument"
ACKNOWLEDGEMENT_DOCUMENT = "Acknowledgement_MarketDocument"


def _local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts on tag names."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    """
    All direct children with the given local name, in document order.

    One-or-many normalisation: a single element and repeated elements
    both come back as a list.
    """
    return [child for child in element if _local_name(child.tag) == name]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    matches = _children(element, name)
    return matches[0] if matches else None


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _acknowledgement_reason(root: ET.Element) -> str:
    """Collect the Reason/text entries of an acknowledgement document."""
    reasons = [
        _child_text(reason, "text")
        for reason in _children(root, "Reason")
    ]
    return "; ".join(text for text in reasons if text) or "no reason given"


def _decode_point(point: ET.Element, period_start, currency, unit) -> PricePoint:
    position_text = _child_text(point, "position")
    amount_text = _child_text(point, "price.amount")

    try:
        position = int(position_text)
    except (TypeError, ValueError):
        raise DecodeError(f"Invalid point position: {position_text!r}")

    try:
        price = float(amount_text)
    except (TypeError, ValueError):
        raise DecodeError(f"Invalid price amount: {amount_text!r}")
    if not math.isfinite(price):
        raise DecodeError(f"Invalid price amount: {amount_text!r}")

    return PricePoint(
        timestamp=period_start + timedelta(hours=position - 1),
        price=price,
        currency=currency,
        unit=unit,
    )


def _decode_series(series: ET.Element) -> List[PricePoint]:
    currency = _child_text(series, "currency_Unit.name")
    unit = _child_text(series, "price_Measure_Unit.name")

    period = _child(series, "Period")
    if period is None:
        raise DecodeError("TimeSeries has no Period element")

    time_interval = _child(period, "timeInterval")
    start_text = _child_text(time_interval, "start") if time_interval is not None else None
    try:
        period_start = parse_utc_datetime(start_text)
    except ValueError:
        raise DecodeError(f"Invalid period start: {start_text!r}")

    return [
        _decode_point(point, period_start, currency, unit)
        for point in _children(period, "Point")
    ]


def decode_publication_document(xml_data) -> List[PricePoint]:
    """
    Decode an ENTSO-E publication document into price points.

    Points from every TimeSeries are concatenated in series order, then
    point order. Each timestamp is the period start plus (position - 1)
    hours in UTC.

    Args:
        xml_data: Raw XML document as str or bytes

    Returns:
        List of PricePoint objects

    Raises:
        DecodeError: If the document is malformed or lacks the expected structure
    """
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as e:
        raise DecodeError(f"Malformed XML document: {e}")

    root_name = _local_name(root.tag)
    if root_name == ACKNOWLEDGEMENT_DOCUMENT:
        raise DecodeError(f"Provider returned no data: {_acknowledgement_reason(root)}")
    if root_name != PUBLICATION_DOCUMENT:
        raise DecodeError(f"Missing {PUBLICATION_DOCUMENT} root element (got {root_name})")

    time_series = _children(root, "TimeSeries")
    if not time_series:
        raise DecodeError("Publication document has no TimeSeries element")

    points: List[PricePoint] = []
    for series in time_series:
        points.extend(_decode_series(series))
    return points
