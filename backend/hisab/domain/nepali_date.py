from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Protocol

from hisab.domain.errors import InvalidDateFormat
from hisab.domain.money import parse_decimal, quantize_amount

NEPALI_MONTHS = (
    "बैशाख", "जेठ", "आषाढ", "श्रावण", "भाद्र", "आश्विन",
    "कार्तिक", "मंसिर", "पौष", "माघ", "फाल्गुन", "चैत्र",
)

ENGLISH_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

CURRENCY_SYMBOL = "रू"

BS_YEAR_OFFSET = 56
BS_MAX_YEAR = 9999
BS_MAX_DAY = 32  # les mois BS font 29 à 32 jours

# dernière date AD dont l'équivalent BS tient sur 4 chiffres
MAX_SUPPORTED_AD_DATE = dt.date(BS_MAX_YEAR - BS_YEAR_OFFSET, 12, 31)


class Calendar(str, Enum):
    BS = "BS"  # Bikram Sambat
    AD = "AD"  # grégorien, calendrier de stockage


@dataclass(frozen=True, order=True)
class BsDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not (1 <= self.year <= BS_MAX_YEAR):
            raise InvalidDateFormat(self.isoformat(), "BS year out of range")
        if not (1 <= self.month <= 12):
            raise InvalidDateFormat(self.isoformat(), "BS month must be 1..12")
        if not (1 <= self.day <= BS_MAX_DAY):
            raise InvalidDateFormat(self.isoformat(), f"BS day must be 1..{BS_MAX_DAY}")

    def isoformat(self) -> str:
        # largeur fixe => comparaison lexicographique valide
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @classmethod
    def fromisoformat(cls, value: str) -> "BsDate":
        year, month, day = _split_date(value)
        return cls(year=year, month=month, day=day)

    def __str__(self) -> str:
        return self.isoformat()


class CalendarConverter(Protocol):
    def to_bs(self, ad: dt.date) -> BsDate:
        ...

    def to_ad(self, bs: BsDate) -> dt.date:
        ...


class FixedOffsetConverter:
    """
    Conversion simplifiée AD <-> BS : année +/- 56, mois et jour inchangés.

    Ce n'est PAS le vrai calendrier Bikram Sambat (mois de longueur variable,
    nouvel an mi-avril). On garde volontairement ce comportement, mais :
    - les dates invalides lèvent InvalidDateFormat au lieu de produire NaN,
    - une date BS sans équivalent grégorien (ex: 2080-02-30) est refusée.
    """

    def __init__(self, offset: int = BS_YEAR_OFFSET) -> None:
        self.offset = offset

    def to_bs(self, ad: dt.date) -> BsDate:
        return BsDate(year=ad.year + self.offset, month=ad.month, day=ad.day)

    def to_ad(self, bs: BsDate) -> dt.date:
        try:
            return dt.date(bs.year - self.offset, bs.month, bs.day)
        except ValueError as exc:
            raise InvalidDateFormat(bs.isoformat(), f"no AD équivalent ({exc})") from exc


_converter: CalendarConverter = FixedOffsetConverter()


def get_converter() -> CalendarConverter:
    return _converter


def set_converter(converter: CalendarConverter) -> CalendarConverter:
    """Remplace le convertisseur global (ex: table officielle). Retourne l'ancien."""
    global _converter
    previous = _converter
    _converter = converter
    return previous


# ---------- parsing ----------

def _split_date(value: str) -> tuple[int, int, int]:
    if not isinstance(value, str):
        raise InvalidDateFormat(value, "date must be a string")

    parts = value.strip().split("-")
    if len(parts) != 3:
        raise InvalidDateFormat(value)

    out: list[int] = []
    for p in parts:
        if not p.isdigit() or not p.isascii():
            raise InvalidDateFormat(value, "components must be numeric")
        out.append(int(p))
    return out[0], out[1], out[2]


def parse_ad_date(value: str) -> dt.date:
    year, month, day = _split_date(value)
    try:
        return dt.date(year, month, day)
    except ValueError as exc:
        raise InvalidDateFormat(value, str(exc)) from exc


def parse_bs_date(value: str) -> BsDate:
    return BsDate.fromisoformat(value)


# ---------- conversion ----------

def to_secondary_calendar(ad: dt.date) -> BsDate:
    """AD (grégorien) -> BS."""
    return get_converter().to_bs(ad)


def to_primary_calendar(bs: BsDate) -> dt.date:
    """BS -> AD (grégorien)."""
    return get_converter().to_ad(bs)


def ensure_supported_ad_date(ad: dt.date) -> dt.date:
    """Refuse une date AD sans équivalent BS représentable."""
    try:
        to_secondary_calendar(ad)
    except InvalidDateFormat as exc:
        raise InvalidDateFormat(
            ad.isoformat(), f"outside supported range (max {MAX_SUPPORTED_AD_DATE.isoformat()})"
        ) from exc
    return ad


def ad_to_bs(value: str) -> str:
    return to_secondary_calendar(parse_ad_date(value)).isoformat()


def bs_to_ad(value: str) -> str:
    return to_primary_calendar(parse_bs_date(value)).isoformat()


def current_secondary_date(today: dt.date | None = None) -> BsDate:
    if today is None:
        today = dt.datetime.now(dt.timezone.utc).date()
    return to_secondary_calendar(today)


# ---------- formatting ----------

def format_secondary(bs: BsDate) -> str:
    return f"{NEPALI_MONTHS[bs.month - 1]} {bs.day}, {bs.year}"


def format_primary(ad: dt.date) -> str:
    return f"{ENGLISH_MONTHS[ad.month - 1]} {ad.day}, {ad.year}"


def format_currency(amount: Decimal | int | float | str) -> str:
    dec = quantize_amount(parse_decimal(amount))
    return f"{CURRENCY_SYMBOL} {dec:,.2f}"
