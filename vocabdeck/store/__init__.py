from vocabdeck.store.types import AccountDocument, Card, Category
from vocabdeck.store.backends import DocumentBackend, InMemoryDocumentBackend, LocalDocumentBackend
from vocabdeck.store.document_store import DocumentStore
from vocabdeck.store.locks import KeyedLock
from vocabdeck.store.seed import SEED_TEMPLATE, seeded_document

__all__ = [
    "AccountDocument",
    "Card",
    "Category",
    "DocumentBackend",
    "DocumentStore",
    "InMemoryDocumentBackend",
    "KeyedLock",
    "LocalDocumentBackend",
    "SEED_TEMPLATE",
    "seeded_document",
]
