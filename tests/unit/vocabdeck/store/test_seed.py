from datetime import datetime, timezone

from vocabdeck.store import SEED_TEMPLATE, seeded_document


def test_seeded_document_shape():
    document = seeded_document()

    assert len(document.categories) == 4
    assert len(document.cards) == 24
    category_ids = {c.id for c in document.categories}
    assert {card.category_id for card in document.cards} == category_ids
    for category in document.categories:
        assert len(document.list_cards(category.id)) == 6
    document.check_integrity()


def test_seeded_names_follow_template():
    document = seeded_document()

    assert [c.name for c in document.categories] == [name for name, _ in SEED_TEMPLATE]
    food = document.categories[0]
    assert food.name == "Food | Еда | Ас"
    assert [(c.word, c.translation) for c in document.list_cards(food.id)] == SEED_TEMPLATE[0][1]


def test_every_category_name_is_trilingual():
    for name, _ in SEED_TEMPLATE:
        assert len(name.split(" | ")) == 3


def test_identifiers_are_fresh_per_call():
    first = seeded_document()
    second = seeded_document()

    first_ids = {c.id for c in first.categories} | {c.id for c in first.cards}
    second_ids = {c.id for c in second.categories} | {c.id for c in second.cards}
    assert len(first_ids) == 28
    assert first_ids.isdisjoint(second_ids)


def test_seed_uses_one_timestamp():
    fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)
    document = seeded_document(clock=lambda: fixed)
    assert {c.created_at for c in document.categories} | {c.created_at for c in document.cards} == {fixed}
