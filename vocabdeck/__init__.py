"""VocabDeck: a personal vocabulary flashcard backend."""

__version__ = "0.1.0"
