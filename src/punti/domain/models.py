"""
@file models.py
@brief Modelli dominio (Receipt, Item) e DTO API tramite Pydantic.
@ingroup domain_module

@details
Definisce il modello dati dello scontrino. Questi modelli fungono da:
- DTO tra layer (api/service/storage)
- schema implicito per serializzazione JSON (nomi campo camelCase)
- validazione completa dell'input: un Receipt invalido non può esistere,
  quindi il calcolo punti non rivalida nulla.

Gli importi usano Decimal (aritmetica base 10): i confronti con 1.00 e 0.25
e la somma esatta degli items non devono soffrire di errori binari.
"""

from __future__ import annotations
import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_RE = re.compile(r"\d{2}:\d{2}", re.ASCII)

# al massimo 15 cifre e 2 decimali: somme e modulo restano esatti nel contesto Decimal di default (28 cifre)
AMOUNT_MAX_DIGITS = 15
AMOUNT_DECIMAL_PLACES = 2


def _to_decimal(v):
    """
    @brief Normalizza un importo prima della validazione Pydantic.
    @param v Importo grezzo (str, int, float o Decimal).
    @return Decimal, oppure il valore originale se non convertibile.

    @note I float passano dal loro repr: 6.49 -> Decimal("6.49").
    """
    if isinstance(v, bool):
        return v
    if isinstance(v, float):
        v = repr(v)
    if isinstance(v, str):
        try:
            return Decimal(v.strip())
        except InvalidOperation:
            return v
    return v


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Item(_Frozen):
    """@brief Riga prodotto dello scontrino."""
    short_description: str = Field(alias="shortDescription")
    price: Decimal = Field(max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES)

    @field_validator("short_description")
    @classmethod
    def _description_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Item description is required.")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def _price_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("price")
    @classmethod
    def _price_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Item price must not be negative.")
        return v


class ReceiptData(_Frozen):
    """
    @brief Campi dello scontrino senza identificativo.
    @details
    Contiene tutte le regole di validazione ereditate dal controller originale:
    retailer obbligatorio, formati data/ora, almeno un item, totale non negativo
    e uguale alla somma esatta dei prezzi.
    """
    retailer: str
    purchase_date: date = Field(alias="purchaseDate")
    purchase_time: time = Field(alias="purchaseTime")
    items: Tuple[Item, ...]
    total: Decimal = Field(max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES)

    @field_validator("retailer")
    @classmethod
    def _retailer_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Retailer name is required.")
        return v

    @field_validator("purchase_date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        if isinstance(v, str):
            if not DATE_RE.fullmatch(v):
                raise ValueError("Purchase date must be in the format yyyy-MM-dd")
            try:
                return datetime.strptime(v, DATE_FORMAT).date()
            except ValueError:
                raise ValueError("Purchase date must be in the format yyyy-MM-dd") from None
        return v

    @field_validator("purchase_time", mode="before")
    @classmethod
    def _parse_time(cls, v):
        if isinstance(v, str):
            if not TIME_RE.fullmatch(v):
                raise ValueError("Purchase time must be in the format HH:mm")
            try:
                return datetime.strptime(v, TIME_FORMAT).time()
            except ValueError:
                raise ValueError("Purchase time must be in the format HH:mm") from None
        return v

    @field_validator("items")
    @classmethod
    def _items_required(cls, v: Tuple[Item, ...]) -> Tuple[Item, ...]:
        if not v:
            raise ValueError("At least one item is required.")
        return v

    @field_validator("total", mode="before")
    @classmethod
    def _total_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("total")
    @classmethod
    def _total_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Total amount must not be negative.")
        return v

    @model_validator(mode="after")
    def _total_matches_items(self):
        if sum((it.price for it in self.items), Decimal("0")) != self.total:
            raise ValueError("Total amount does not match the sum of item prices.")
        return self


class ProcessReceiptRequest(ReceiptData):
    """@brief Payload di POST /receipts/process."""


class Receipt(ReceiptData):
    """
    @brief Scontrino memorizzato.
    @details id è None finché lo store non lo assegna; poi il record è immutabile.
    """
    id: Optional[str] = None


class ProcessReceiptResponse(BaseModel):
    id: str


class ReceiptPointsResponse(BaseModel):
    points: int


class PointsBreakdown(BaseModel):
    """
    @brief Contributo di ciascuna regola al punteggio.
    @details
    total è la somma dei contributi ed è il valore restituito da compute_points.
    In JSON i campi sono camelCase come il resto del formato wire.
    """
    model_config = ConfigDict(populate_by_name=True)

    retailer: int = 0
    round_dollar: int = Field(default=0, alias="roundDollar")
    quarter_multiple: int = Field(default=0, alias="quarterMultiple")
    item_pairs: int = Field(default=0, alias="itemPairs")
    item_descriptions: int = Field(default=0, alias="itemDescriptions")
    odd_day: int = Field(default=0, alias="oddDay")
    afternoon: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return (
            self.retailer
            + self.round_dollar
            + self.quarter_multiple
            + self.item_pairs
            + self.item_descriptions
            + self.odd_day
            + self.afternoon
        )
