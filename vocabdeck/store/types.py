"""Categories, cards and the per-account document that holds them."""

import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vocabdeck.core.exceptions import (
    CategoryNotFound,
    IntegrityViolation,
    InvalidInput,
    NotFound,
    NothingToUpdate,
)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_text(value: Optional[str], message: str) -> str:
    """Trim ``value`` and reject it when nothing is left."""
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidInput(message)
    return text


class CamelModel(BaseModel):
    """Base model whose JSON field names are camelCase, on disk and over the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Category(CamelModel):
    id: str = Field(default_factory=new_id)
    name: str
    created_at: datetime = Field(default_factory=utcnow)


class Card(CamelModel):
    id: str = Field(default_factory=new_id)
    category_id: str
    word: str
    translation: str
    created_at: datetime = Field(default_factory=utcnow)


class AccountDocument(CamelModel):
    """Every category and card of one account, persisted and replaced as a single unit.

    Invariant: each card's ``category_id`` names a category in ``categories``. Nothing enforces this structurally, so
    ``delete_category`` cascades and ``check_integrity`` runs before every save.

    All mutating operations validate their input completely before touching the document, so a failed operation leaves
    the document unchanged.
    """

    categories: List[Category] = Field(default_factory=list)
    cards: List[Card] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> List[Category]:
        return list(self.categories)

    def get_category(self, category_id: str) -> Category:
        for category in self.categories:
            if category.id == category_id:
                return category
        raise NotFound()

    def create_category(self, name: Optional[str], *, clock: Callable[[], datetime] = utcnow) -> Category:
        category = Category(name=_require_text(name, "name required"), created_at=clock())
        self.categories.append(category)
        return category

    def rename_category(self, category_id: str, name: Optional[str]) -> Category:
        new_name = _require_text(name, "name required")
        category = self.get_category(category_id)
        category.name = new_name
        return category

    def delete_category(self, category_id: str) -> List[Card]:
        """Remove the category and every card filed under it. Returns the removed cards."""
        category = self.get_category(category_id)
        self.categories.remove(category)
        removed = [card for card in self.cards if card.category_id == category.id]
        self.cards = [card for card in self.cards if card.category_id != category.id]
        return removed

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def list_cards(self, category_id: str) -> List[Card]:
        return [card for card in self.cards if card.category_id == category_id]

    def get_card(self, card_id: str) -> Card:
        for card in self.cards:
            if card.id == card_id:
                return card
        raise NotFound()

    def create_card(
        self,
        category_id: str,
        word: Optional[str],
        translation: Optional[str],
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> Card:
        word = word.strip() if isinstance(word, str) else ""
        translation = translation.strip() if isinstance(translation, str) else ""
        if not word or not translation:
            raise InvalidInput("word and translation required")
        try:
            category = self.get_category(category_id)
        except NotFound:
            raise CategoryNotFound() from None
        card = Card(category_id=category.id, word=word, translation=translation, created_at=clock())
        self.cards.append(card)
        return card

    def update_card(self, card_id: str, word: Optional[str] = None, translation: Optional[str] = None) -> Card:
        card = self.get_card(card_id)
        if word is None and translation is None:
            raise NothingToUpdate()
        changes = {}
        if word is not None:
            changes["word"] = _require_text(word, "word cannot be empty")
        if translation is not None:
            changes["translation"] = _require_text(translation, "translation cannot be empty")
        for field, value in changes.items():
            setattr(card, field, value)
        return card

    def delete_card(self, card_id: str) -> Card:
        card = self.get_card(card_id)
        self.cards.remove(card)
        return card

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def dangling_cards(self) -> List[Card]:
        category_ids = {category.id for category in self.categories}
        return [card for card in self.cards if card.category_id not in category_ids]

    def check_integrity(self) -> None:
        dangling = self.dangling_cards()
        if dangling:
            ids = ", ".join(card.id for card in dangling)
            raise IntegrityViolation(f"Cards reference missing categories: {ids}")
