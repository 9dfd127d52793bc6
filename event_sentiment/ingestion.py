"""
Event Sentiment - Ingestion Boundary.

============================================================
PURPOSE
============================================================
Builds EconomicEventObservation values from raw calendar
and form payloads (observation JSON).

Everything fuzzy about incoming events is resolved here:
- Event category from explicit tag, type tag or title
- Vote split text ("hike-cut-hold")
- Numeric strings and enum tags

The analyzer never looks at titles.

============================================================
CATEGORY RESOLUTION ORDER
============================================================
1. Explicit category
2. Specific type tag (INTEREST_RATE, UNEMPLOYMENT_CLAIMS,
   NON_FARM_PAYROLLS)
3. Title keywords (case-insensitive)
4. Generic type tag (EMPLOYMENT, INFLATION, GDP)
5. OTHER

============================================================
"""

import math
import numbers
from typing import Any, Dict, Mapping, Optional

from core.exceptions import InvalidObservation
from core.types import Currency

from .types import (
    EconomicEventObservation,
    EventCategory,
    MarketSurprise,
    PolicyTone,
    VoteSplit,
)


_SPECIFIC_TYPE_TAGS = {
    "INTEREST_RATE": EventCategory.INTEREST_RATE,
    "UNEMPLOYMENT_CLAIMS": EventCategory.UNEMPLOYMENT_CLAIMS,
    "NON_FARM_PAYROLLS": EventCategory.NON_FARM_PAYROLLS,
    "NFP": EventCategory.NON_FARM_PAYROLLS,
}

# Checked in order; first match wins
_TITLE_KEYWORDS = (
    ("rate decision", EventCategory.INTEREST_RATE),
    ("unemployment claims", EventCategory.UNEMPLOYMENT_CLAIMS),
    ("non-farm payrolls", EventCategory.NON_FARM_PAYROLLS),
    ("nfp", EventCategory.NON_FARM_PAYROLLS),
)

_GENERIC_TYPE_TAGS = {
    "EMPLOYMENT": EventCategory.EMPLOYMENT,
    "INFLATION": EventCategory.INFLATION,
    "CPI": EventCategory.INFLATION,
    "GDP": EventCategory.GDP,
}


def resolve_event_category(
    title: Optional[str],
    event_type: Optional[str],
    category: Optional[Any] = None,
) -> EventCategory:
    """
    Resolve the category of an event.

    Args:
        title: Event title, e.g. "US Unemployment Claims"
        event_type: Raw type tag from the source, e.g. "EMPLOYMENT"
        category: Explicit category, wins when given

    Returns:
        Resolved EventCategory (OTHER when nothing matches)

    Raises:
        InvalidObservation: If an explicit category is unknown
    """
    if category is not None and category != "":
        return _parse_category(category)

    type_tag = event_type.strip().upper() if isinstance(event_type, str) else ""

    if type_tag in _SPECIFIC_TYPE_TAGS:
        return _SPECIFIC_TYPE_TAGS[type_tag]

    lowered = title.lower() if isinstance(title, str) else ""
    for keyword, resolved in _TITLE_KEYWORDS:
        if keyword in lowered:
            return resolved

    return _GENERIC_TYPE_TAGS.get(type_tag, EventCategory.OTHER)


def parse_vote_split(pattern: Any) -> VoteSplit:
    """
    Parse a committee vote pattern.

    "0-5-4" -> VoteSplit(hike=0, cut=5, hold=4)

    Raises:
        InvalidObservation: If the pattern is not three
            non-negative integers separated by '-'
    """
    if not isinstance(pattern, str):
        raise InvalidObservation(
            "Voting pattern must be a 'hike-cut-hold' string",
            field="votingPattern",
            value=pattern,
        )

    parts = [part.strip() for part in pattern.strip().split("-")]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidObservation(
            f"Malformed voting pattern: {pattern!r}",
            field="votingPattern",
            value=pattern,
        )

    hike, cut, hold = (int(part) for part in parts)
    return VoteSplit(hike=hike, cut=cut, hold=hold)


def observation_from_dict(data: Mapping[str, Any]) -> EconomicEventObservation:
    """
    Build an observation from observation JSON.

    Keys: title, currency, eventType, category, actualValue,
    expectedValue, previousValue, additionalData {votingPattern,
    speechTone, policyChange, marketSurprise}.

    Raises:
        InvalidObservation: Missing title/currency or malformed field
        UnsupportedCurrency: Unknown currency code
    """
    if data is None:
        raise InvalidObservation("Observation is required")

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InvalidObservation("Event title is required", field="title", value=title)

    raw_currency = data.get("currency")
    if raw_currency is None or raw_currency == "":
        raise InvalidObservation("Event currency is required", field="currency")
    currency = Currency.parse(raw_currency)

    event_type = data.get("eventType")
    additional: Dict[str, Any] = dict(data.get("additionalData") or {})

    voting_pattern = additional.get("votingPattern")
    policy_change = additional.get("policyChange")

    return EconomicEventObservation(
        title=title,
        currency=currency,
        category=resolve_event_category(title, event_type, data.get("category")),
        actual=_parse_number(data.get("actualValue"), "actualValue"),
        expected=_parse_number(data.get("expectedValue"), "expectedValue"),
        previous=_parse_number(data.get("previousValue"), "previousValue"),
        vote_split=parse_vote_split(voting_pattern) if voting_pattern else None,
        policy_tone=_parse_tag(additional.get("speechTone"), PolicyTone, "speechTone"),
        policy_change=str(policy_change) if policy_change else None,
        market_surprise=_parse_tag(
            additional.get("marketSurprise"), MarketSurprise, "marketSurprise"
        ),
        event_type=event_type,
    )


# ============================================================
# FIELD PARSERS
# ============================================================


def _parse_category(value: Any) -> EventCategory:
    if isinstance(value, EventCategory):
        return value
    if isinstance(value, str):
        try:
            return EventCategory(value.strip().upper())
        except ValueError:
            pass
    raise InvalidObservation(
        f"Unknown event category: {value}",
        field="category",
        value=value,
    )


def _parse_number(value: Any, field: str) -> Optional[float]:
    """None or empty string means absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None

    if isinstance(value, bool):
        raise InvalidObservation(f"{field} must be a number", field=field, value=value)

    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidObservation(f"{field} must be a number", field=field, value=value)
    else:
        raise InvalidObservation(f"{field} must be a number", field=field, value=value)

    if not math.isfinite(number):
        raise InvalidObservation(f"{field} must be finite", field=field, value=value)
    return number


def _parse_tag(value: Any, enum_cls, field: str):
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().upper())
        except ValueError:
            pass
    raise InvalidObservation(f"Unknown {field}: {value}", field=field, value=value)
