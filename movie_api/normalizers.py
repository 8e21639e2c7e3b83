import json
from typing import Any, Dict, List, Optional, Union


class InvalidAmountError(ValueError):
    pass


def parse_json_list(raw: Optional[Union[str, bytes]]) -> List[Dict[str, Any]]:
    """Decodes a stored JSON array of ``{"id", "name"}`` objects.

    Used for both the genres and the production companies columns. Anything
    that is not a decodable JSON array comes back as an empty list, and
    entries without an id and a name are dropped.
    """
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(decoded, list):
        return []

    items = []
    for entry in decoded:
        if not isinstance(entry, dict) or "id" not in entry or "name" not in entry:
            continue
        try:
            items.append({"id": int(entry["id"]), "name": str(entry["name"])})
        except (TypeError, ValueError):
            continue
    return items


def format_currency(amount: Union[int, float]) -> str:
    """1000000 -> "$1,000,000"."""
    if isinstance(amount, float):
        if not amount.is_integer():
            raise InvalidAmountError(f"Currency amount must be a whole number, got {amount}")
        amount = int(amount)
    if amount < 0:
        raise InvalidAmountError(f"Currency amount must not be negative, got {amount}")
    return f"${amount:,}"
