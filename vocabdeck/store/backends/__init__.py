from vocabdeck.store.backends.document_backend import DocumentBackend
from vocabdeck.store.backends.local_document_backend import LocalDocumentBackend
from vocabdeck.store.backends.memory_document_backend import InMemoryDocumentBackend

__all__ = ["DocumentBackend", "InMemoryDocumentBackend", "LocalDocumentBackend"]
