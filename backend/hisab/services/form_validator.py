from __future__ import annotations

from dataclasses import dataclass
import datetime as dt

from hisab.domain.money import format_plain, parse_amount
from hisab.domain.nepali_date import (
    Calendar,
    current_secondary_date,
    ensure_supported_ad_date,
    parse_ad_date,
    parse_bs_date,
    to_primary_calendar,
    to_secondary_calendar,
)
from hisab.domain.transaction import Transaction, TransactionDraft, TransactionType

DATE_REQUIRED = "Date is required"
DATE_INVALID = "Invalid date"
SOURCE_REQUIRED = "Source/Item is required"
AMOUNT_INVALID = "Please enter a valid amount greater than 0"


@dataclass(frozen=True)
class TransactionForm:
    """Valeurs brutes du formulaire (tout en texte, comme saisi)."""
    date: str = ""
    type: str = TransactionType.EXPENSE.value
    source: str = ""
    amount: str = ""
    date_format: Calendar = Calendar.BS


def _form_date_to_ad(form: TransactionForm) -> dt.date:
    if Calendar(form.date_format) == Calendar.BS:
        ad = to_primary_calendar(parse_bs_date(form.date))
    else:
        ad = parse_ad_date(form.date)
    return ensure_supported_ad_date(ad)


def validate(form: TransactionForm) -> dict[str, str]:
    """
    Valide tous les champs sans s'arrêter à la première erreur.
    Retourne {champ: message}; un dict vide signifie que le formulaire est valide.
    """
    errors: dict[str, str] = {}

    if not (form.date or "").strip():
        errors["date"] = DATE_REQUIRED
    else:
        try:
            _form_date_to_ad(form)
        except ValueError:  # InvalidDateFormat, ou date_format inconnu
            errors["date"] = DATE_INVALID

    if not (form.source or "").strip():
        errors["source"] = SOURCE_REQUIRED

    try:
        parse_amount(form.amount)
    except (TypeError, ValueError):
        errors["amount"] = AMOUNT_INVALID

    try:
        TransactionType(form.type)
    except ValueError:
        errors["type"] = "Type must be income or expense"

    return errors


def to_draft(form: TransactionForm) -> TransactionDraft:
    errors = validate(form)
    if errors:
        raise ValueError(f"invalid transaction form: {errors}")

    return TransactionDraft.create(
        date=_form_date_to_ad(form),
        type=form.type,
        source=form.source,
        amount=form.amount,
    )


def from_transaction(tx: Transaction) -> TransactionForm:
    # édition : pré-remplissage en BS
    return TransactionForm(
        date=to_secondary_calendar(tx.date).isoformat(),
        type=tx.type.value,
        source=tx.source,
        amount=format_plain(tx.amount),
        date_format=Calendar.BS,
    )


def blank_form(today: dt.date | None = None) -> TransactionForm:
    return TransactionForm(date=current_secondary_date(today).isoformat())
