"""Pure functions for transaction validation and serialization.

This module contains the functional core for building transactions:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every function here raises ValidationError on bad input rather than
returning partial data.
"""

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from tally.domain.models import CategoryName, IsoDate, Money, Transaction
from tally.errors import ValidationError

TRANSACTION_FIELDS = ("id", "text", "amount", "category", "date")

# Persisted amounts are JSON numbers read back as doubles, which hold 15
# significant digits exactly
MAX_AMOUNT_DIGITS = 15
MAX_AMOUNT_PLACES = 15


def parse_text(text: Any) -> str:
    """Validate a transaction label.

    Args:
        text: Raw label.

    Returns:
        Label with surrounding whitespace stripped.

    Raises:
        ValidationError: If text is not a string or is blank.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Text must not be empty")
    return text.strip()


def _significant_digits(value: Decimal) -> tuple[int, int]:
    """Count significant digits and the exponent of the last one."""
    _, digits, exponent = value.as_tuple()
    assert isinstance(exponent, int)
    stripped = "".join(map(str, digits)).rstrip("0") or "0"
    return len(stripped), exponent + len(digits) - len(stripped)


def parse_amount(amount: Any) -> Money:
    """Convert a raw amount to a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1") rather than its
    binary expansion. Amounts are limited to what a persisted JSON number
    reproduces exactly: below 10**15 in magnitude, at most 15 significant
    digits and at most 15 decimal places.

    Args:
        amount: int, float, Decimal or numeric string.

    Returns:
        Amount as Money.

    Raises:
        ValidationError: If amount is not a finite number or exceeds those limits.
    """
    if isinstance(amount, bool) or amount is None:
        raise ValidationError("Amount must be a number")

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, (float, str)):
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise ValidationError(f"Amount must be a number, got {amount!r}") from None
    else:
        raise ValidationError(f"Amount must be a number, got {type(amount).__name__}")

    if not value.is_finite():
        raise ValidationError(f"Amount must be finite, got {amount!r}")
    if value.is_zero():
        return Money(value)

    if value.adjusted() >= MAX_AMOUNT_DIGITS:
        raise ValidationError(f"Amount is too large (at most {MAX_AMOUNT_DIGITS} whole digits)")
    digits, exponent = _significant_digits(value)
    if exponent < -MAX_AMOUNT_PLACES:
        raise ValidationError(f"Amount has more than {MAX_AMOUNT_PLACES} decimal places")
    if digits > MAX_AMOUNT_DIGITS:
        raise ValidationError(f"Amount has more than {MAX_AMOUNT_DIGITS} significant digits")
    return Money(value)


def parse_category(category: Any) -> CategoryName:
    """Validate a category name.

    Raises:
        ValidationError: If category is not a string or is blank.
    """
    if not isinstance(category, str) or not category.strip():
        raise ValidationError("Category must not be empty")
    return CategoryName(category.strip())


def parse_date(value: Any) -> IsoDate:
    """Normalize a calendar date to YYYY-MM-DD.

    Args:
        value: ISO-8601 date string, date or datetime.

    Returns:
        Normalized ISO date string.

    Raises:
        ValidationError: If date is empty or unparsable.
    """
    if isinstance(value, datetime):
        return IsoDate(value.date().isoformat())
    if isinstance(value, date):
        return IsoDate(value.isoformat())
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Date must not be empty")

    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None
    return IsoDate(parsed.isoformat())


def build_transaction(txn_id: int, text: Any, amount: Any, category: Any, date_value: Any) -> Transaction:
    """Validate raw fields and build a Transaction.

    Args:
        txn_id: Identifier to assign.
        text: Transaction label.
        amount: Signed amount (negative for expenses).
        category: Category name.
        date_value: Transaction date.

    Returns:
        New immutable Transaction.

    Raises:
        ValidationError: If any field is missing or malformed.
    """
    return Transaction(
        id=txn_id,
        text=parse_text(text),
        amount=parse_amount(amount),
        category=parse_category(category),
        date=parse_date(date_value),
    )


def amount_to_json(amount: Money) -> int | float:
    """Render an amount as a JSON number (integers stay integers).

    Amounts accepted by parse_amount read back equal to the original.
    """
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Convert a transaction to its persisted object shape."""
    return {
        "id": txn.id,
        "text": txn.text,
        "amount": amount_to_json(txn.amount),
        "category": txn.category,
        "date": txn.date,
    }


def transaction_from_dict(data: Any) -> Transaction:
    """Build a transaction from its persisted object shape.

    Args:
        data: Decoded JSON object with id, text, amount, category and date.

    Returns:
        Validated Transaction.

    Raises:
        ValidationError: If data is not an object or any field is invalid.
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a transaction object, got {type(data).__name__}")

    missing = [field for field in TRANSACTION_FIELDS if field not in data]
    if missing:
        raise ValidationError(f"Missing fields: {', '.join(missing)}")

    txn_id = data["id"]
    if isinstance(txn_id, bool) or not isinstance(txn_id, int) or txn_id < 1:
        raise ValidationError(f"Invalid id: {txn_id!r}")

    return build_transaction(txn_id, data["text"], data["amount"], data["category"], data["date"])


def transactions_from_list(items: Any) -> list[Transaction]:
    """Build transactions from a decoded JSON array.

    Raises:
        ValidationError: If items is not a list, an element is invalid,
            or two elements share an id.
    """
    if not isinstance(items, list):
        raise ValidationError(f"Expected an array of transactions, got {type(items).__name__}")

    transactions = []
    seen: set[int] = set()
    for index, item in enumerate(items):
        try:
            txn = transaction_from_dict(item)
        except ValidationError as e:
            raise ValidationError(f"Entry {index}: {e}") from None
        if txn.id in seen:
            raise ValidationError(f"Entry {index}: duplicate id {txn.id}")
        seen.add(txn.id)
        transactions.append(txn)
    return transactions


def encode_transactions(transactions: list[Transaction] | tuple[Transaction, ...], indent: int | None = None) -> str:
    """Serialize transactions to a JSON array."""
    return json.dumps(
        [transaction_to_dict(txn) for txn in transactions],
        indent=indent,
        ensure_ascii=False,
    )


def decode_json(raw: str) -> Any:
    """Decode JSON text, reading non-integer numbers as Decimal.

    Raises:
        ValueError: If raw is not valid JSON.
    """
    return json.loads(raw, parse_float=Decimal)


def next_id_after(transactions: list[Transaction], floor: int = 1) -> int:
    """Smallest counter value greater than every id in transactions.

    Args:
        transactions: Existing transactions.
        floor: Minimum value to return.

    Returns:
        max(floor, highest id + 1).
    """
    if not transactions:
        return floor
    return max(floor, max(txn.id for txn in transactions) + 1)
