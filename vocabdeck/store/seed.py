"""Starter vocabulary written into every new account's document.

Each category name lists English, Russian and Kazakh; each card pairs a German word with one translation.
"""

from datetime import datetime
from typing import Callable

from vocabdeck.store.types import AccountDocument, Card, Category, utcnow

SEED_TEMPLATE: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Food | Еда | Ас",
        [
            ("Brot", "Нан"),
            ("Apfel", "Алма"),
            ("Wasser", "Су"),
            ("Käse", "Ірімшік"),
            ("Milch", "Сүт"),
            ("Suppe", "Сорпа"),
        ],
    ),
    (
        "Furniture | Мебель | Жиһаз",
        [
            ("Stuhl", "Орындық"),
            ("Tisch", "Үстел"),
            ("Bett", "Төсек"),
            ("Schrank", "Шкаф"),
            ("Sofa", "Диван"),
            ("Lampe", "Шам"),
        ],
    ),
    (
        "Travel | Путешествия | Саяхат",
        [
            ("Bahnhof", "Вокзал"),
            ("Flughafen", "Әуежай"),
            ("Ticket", "Билет"),
            ("Karte", "Карта"),
            ("Hotel", "Қонақүй"),
            ("Bus", "Автобус"),
        ],
    ),
    (
        "Animals | Животные | Жануарлар",
        [
            ("Hund", "Ит"),
            ("Katze", "Мысық"),
            ("Vogel", "Құс"),
            ("Pferd", "Жылқы"),
            ("Fisch", "Балық"),
            ("Schaf", "Қой"),
        ],
    ),
]


def seeded_document(clock: Callable[[], datetime] = utcnow) -> AccountDocument:
    """Build a fresh document from ``SEED_TEMPLATE``. Every call generates new identifiers."""
    now = clock()
    document = AccountDocument()
    for name, pairs in SEED_TEMPLATE:
        category = Category(name=name, created_at=now)
        document.categories.append(category)
        document.cards.extend(
            Card(category_id=category.id, word=word, translation=translation, created_at=now)
            for word, translation in pairs
        )
    return document
