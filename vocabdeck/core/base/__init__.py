from vocabdeck.core.base.vocabdeck_base import VocabDeck, VocabDeckABC, VocabDeckABCMeta, VocabDeckMeta

__all__ = ["VocabDeck", "VocabDeckABC", "VocabDeckABCMeta", "VocabDeckMeta"]
