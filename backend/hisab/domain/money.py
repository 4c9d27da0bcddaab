from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_QUANT = Decimal("0.01")


def parse_decimal(value: str | int | float | Decimal) -> Decimal:
    """
    Parse robuste d'un montant saisi.
    Autorise "12.34", "12", " 12.5 ", ainsi que les int/float/Decimal déjà typés.
    Refuse les valeurs vides et non finies (NaN, Infinity).
    """
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")

    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, float):
        # repr() évite les artefacts binaires (0.1 -> 0.1000000000000000055...)
        dec = Decimal(repr(value))
    elif isinstance(value, str):
        raw = value.strip()
        if raw == "":
            raise ValueError("Amount cannot be empty")
        try:
            dec = Decimal(raw)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal amount: {value!r}") from exc
    else:
        raise TypeError("Amount must be a string or a number")

    if not dec.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return dec


def try_parse_decimal(value: str | None) -> Decimal | None:
    # Bornes de filtre : vide ou illisible => pas de borne
    if value is None:
        return None
    try:
        return parse_decimal(value)
    except (TypeError, ValueError):
        return None


def quantize_amount(amount: Decimal) -> Decimal:
    # Arrondi comptable classique
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def parse_amount(value: str | int | float | Decimal) -> Decimal:
    """Montant de transaction : décimal quantifié à 2 chiffres, strictement positif."""
    dec = quantize_amount(parse_decimal(value))
    if dec <= 0:
        raise ValueError("Amount must be greater than 0")
    return dec


def format_plain(amount: Decimal) -> str:
    """Rendu machine : '50000.00' (ni symbole ni séparateur de milliers)."""
    return f"{quantize_amount(amount):.2f}"
