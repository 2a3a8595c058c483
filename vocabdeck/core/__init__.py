from vocabdeck.core.utils.checks import first_not_none, ifnone
from vocabdeck.core.config import CoreSettings, get_settings, reset_settings
from vocabdeck.core.base import VocabDeck, VocabDeckABC, VocabDeckABCMeta, VocabDeckMeta
from vocabdeck.core.logging.logger import get_logger, setup_logger

setup_logger()  # Initialize the default logger

from vocabdeck.core.exceptions import (
    CategoryNotFound,
    CorruptDocumentError,
    IntegrityViolation,
    InvalidCredentials,
    InvalidInput,
    InvalidOrExpiredToken,
    MissingToken,
    NotFound,
    NothingToUpdate,
    UsernameTaken,
    VocabDeckError,
)

__all__ = [
    "CategoryNotFound",
    "CoreSettings",
    "CorruptDocumentError",
    "first_not_none",
    "get_logger",
    "get_settings",
    "ifnone",
    "IntegrityViolation",
    "InvalidCredentials",
    "InvalidInput",
    "InvalidOrExpiredToken",
    "MissingToken",
    "NotFound",
    "NothingToUpdate",
    "reset_settings",
    "setup_logger",
    "UsernameTaken",
    "VocabDeck",
    "VocabDeckABC",
    "VocabDeckABCMeta",
    "VocabDeckError",
    "VocabDeckMeta",
]
