"""
Catalog API — Input Validation
================================

What:  Field-presence and type checks shared by create and update, plus
       query-parameter parsing for pagination.
Why:   One routine for both write paths so their rules cannot drift apart.
How:   Pure functions; failures raise ValidationError naming the field.

Rules:
    - A field is present when it is not None and not a blank string.
      price = 0 is present.
    - Create requires name, category and price, checked in that order;
      the first missing one is reported.
    - Update skips fields absent from the body; a field that is sent must
      still be present in the sense above.
    - price must be a finite number ≥ 0 and JSON booleans are not numbers.
      Strings are parsed with float(), so "29.99" is accepted and
      "29.99abc" is not. Digit separators ("1_000") are refused.
    - page/page_size take the leading integer of the text ("2abc" → 2,
      "1.9" → 1). No leading integer, or a value below 1, is rejected.
      So is a value above MAX_STORE_INT.
"""

import math
import re
from typing import Any, Dict, Mapping, Optional

from catalog_api.exceptions import ValidationError

PRODUCT_FIELDS = ("name", "category", "price")

# Largest value a signed 64-bit column, OFFSET or LIMIT accepts
MAX_STORE_INT = 2**63 - 1

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_price(value: Any) -> float:
    """Convert a JSON number or numeric string to a non-negative float."""
    if isinstance(value, bool):
        raise ValidationError("The field [price] must be a number", field="price")
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        if "_" in value:
            raise ValidationError("The field [price] must be a number", field="price")
        try:
            price = float(value.strip())
        except ValueError:
            raise ValidationError("The field [price] must be a number", field="price")
    else:
        raise ValidationError("The field [price] must be a number", field="price")

    if not math.isfinite(price):
        raise ValidationError("The field [price] must be a number", field="price")
    if price < 0:
        raise ValidationError("The field [price] cannot be negative", field="price")
    return price


def validate_product_fields(data: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate and normalize product fields.

    Args:
        data:    Raw field values (e.g. a request body dump)
        partial: False for create (all fields required),
                 True for update (fields absent from data are skipped,
                 fields sent blank are rejected)

    Returns:
        Dict with only the supplied fields, price converted to float.

    Raises:
        ValidationError: first missing (create) or malformed field
    """
    cleaned: Dict[str, Any] = {}
    for field in PRODUCT_FIELDS:
        if partial and field not in data:
            continue
        value = data.get(field)
        if is_blank(value):
            if partial:
                raise ValidationError(f"The field [{field}] cannot be empty", field=field)
            raise ValidationError(f"The field [{field}] is required", field=field)

        if field == "price":
            cleaned[field] = parse_price(value)
        elif not isinstance(value, str):
            raise ValidationError(f"The field [{field}] must be text", field=field)
        else:
            cleaned[field] = value
    return cleaned


def parse_positive_int(raw: Optional[str], name: str, default: int) -> int:
    """Parse a query parameter by its leading integer; absent → default."""
    if raw is None:
        return default
    match = _INTEGER_PREFIX.match(raw)
    if match is None:
        raise ValidationError(
            f"The query parameter [{name}] must be a positive integer",
            field=name,
            context={"value": raw},
        )
    value = int(match.group(1))
    if value < 1:
        raise ValidationError(
            f"The query parameter [{name}] must be a positive integer",
            field=name,
            context={"value": raw},
        )
    if value > MAX_STORE_INT:
        raise ValidationError(
            f"The query parameter [{name}] is too large",
            field=name,
            context={"value": raw},
        )
    return value
