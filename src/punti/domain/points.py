"""
@file points.py
@brief Calcolo deterministico dei punti premio di uno scontrino.
@ingroup domain_module

@details
Otto regole indipendenti, sommate. Ogni regola legge lo scontrino originale:
nessun contributo influenza le condizioni delle altre.
- 1 punto per ogni carattere alfanumerico del retailer
- 50 punti se il totale non ha centesimi
- 25 punti se il totale è multiplo di 0.25 (cumulabile con il precedente)
- 5 punti ogni due items
- ceil(price * 0.2) per ogni item con descrizione (trim) lunga multiplo di 3
- 6 punti se il giorno di acquisto è dispari
- 10 punti se l'ora di acquisto è strettamente tra 14:00 e 16:00

Funzioni pure, senza stato: sicure da invocare da più thread.
"""

from __future__ import annotations
import math
from datetime import date, time
from decimal import Decimal
from typing import Iterable

from .models import Item, PointsBreakdown, ReceiptData


POINTS_PER_RETAILER_CHAR = 1
POINTS_ROUND_DOLLAR = 50
POINTS_QUARTER_MULTIPLE = 25
POINTS_PER_ITEM_PAIR = 5
POINTS_ODD_DAY = 6
POINTS_AFTERNOON = 10

DESCRIPTION_LENGTH_FACTOR = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
QUARTER = Decimal("0.25")

AFTERNOON_START = time(14, 0)
AFTERNOON_END = time(16, 0)


def retailer_points(retailer: str) -> int:
    # lettere o cifre decimali; punteggiatura e spazi valgono 0
    return sum(POINTS_PER_RETAILER_CHAR for c in retailer if c.isalpha() or c.isdecimal())


def round_dollar_points(total: Decimal) -> int:
    return POINTS_ROUND_DOLLAR if total % 1 == 0 else 0


def quarter_multiple_points(total: Decimal) -> int:
    return POINTS_QUARTER_MULTIPLE if total % QUARTER == 0 else 0


def item_pair_points(item_count: int) -> int:
    return (item_count // 2) * POINTS_PER_ITEM_PAIR


def item_description_points(item: Item) -> int:
    """
    @brief Punti per singolo item in base alla lunghezza della descrizione.
    @param item Item dello scontrino.
    @return ceil(price * 0.2) se la descrizione (trim) ha lunghezza multipla positiva di 3, altrimenti 0.

    @note Il ceil è applicato per item, non sulla somma.
    """
    length = len(item.short_description.strip())
    if length == 0 or length % DESCRIPTION_LENGTH_FACTOR != 0:
        return 0
    return math.ceil(item.price * DESCRIPTION_PRICE_MULTIPLIER)


def odd_day_points(purchase_date: date) -> int:
    return POINTS_ODD_DAY if purchase_date.day % 2 != 0 else 0


def afternoon_points(purchase_time: time) -> int:
    # estremi esclusi: 14:00 e 16:00 non danno punti
    return POINTS_AFTERNOON if AFTERNOON_START < purchase_time < AFTERNOON_END else 0


def _items_description_points(items: Iterable[Item]) -> int:
    return sum(item_description_points(it) for it in items)


def points_breakdown(receipt: ReceiptData) -> PointsBreakdown:
    """
    @brief Calcola il contributo di ciascuna regola.
    @param receipt Scontrino già validato (Receipt o ProcessReceiptRequest).
    @return PointsBreakdown con un campo per regola e il totale.
    """
    return PointsBreakdown(
        retailer=retailer_points(receipt.retailer),
        round_dollar=round_dollar_points(receipt.total),
        quarter_multiple=quarter_multiple_points(receipt.total),
        item_pairs=item_pair_points(len(receipt.items)),
        item_descriptions=_items_description_points(receipt.items),
        odd_day=odd_day_points(receipt.purchase_date),
        afternoon=afternoon_points(receipt.purchase_time),
    )


def compute_points(receipt: ReceiptData) -> int:
    """
    @brief Punteggio totale dello scontrino.
    @param receipt Scontrino già validato.
    @return Intero >= 0.

    @details
    Non rivalida l'input: il modello Receipt rifiuta in costruzione gli
    scontrini malformati (items vuoti, prezzi negativi, totale incoerente).
    """
    return points_breakdown(receipt).total
