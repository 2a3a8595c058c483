"""VocabDeck base class. Provides unified configuration and logging."""

from abc import ABCMeta

from vocabdeck.core.config import CoreSettings, get_settings
from vocabdeck.core.logging.logger import get_logger
from vocabdeck.core.utils import ifnone


class VocabDeckMeta(type):
    """Metaclass for VocabDeck class.

    The VocabDeckMeta metaclass enables classes deriving from VocabDeck to use the same default logger within class
    methods as they do within instance methods::

        from vocabdeck.core import VocabDeck

        class MyClass(VocabDeck):
            def instance_method(self):
                self.logger.info(f"Using logger: {self.logger.name}")  # Using logger: vocabdeck.my_module.MyClass

            @classmethod
            def class_method(cls):
                cls.logger.info(f"Using logger: {cls.logger.name}")  # Using logger: vocabdeck.my_module.MyClass
    """

    def __init__(cls, name, bases, attr_dict):
        super().__init__(name, bases, attr_dict)
        cls._logger = None

    @property
    def logger(cls):
        if cls._logger is None:
            cls._logger = get_logger(cls.unique_name)
        return cls._logger

    @logger.setter
    def logger(cls, new_logger):
        cls._logger = new_logger

    @property
    def unique_name(cls) -> str:
        return cls.__module__ + "." + cls.__name__


class VocabDeck(metaclass=VocabDeckMeta):
    """Base class for VocabDeck components.

    Gives every component a ``logger`` named after its class and the resolved ``settings``. Settings default to the
    cached process-wide instance; tests pass their own.
    """

    def __init__(self, *, settings: CoreSettings | None = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = ifnone(settings, get_settings())

    @property
    def logger(self):
        return type(self).logger

    @logger.setter
    def logger(self, new_logger):
        type(self).logger = new_logger


class VocabDeckABCMeta(VocabDeckMeta, ABCMeta):
    """Metaclass that combines VocabDeckMeta and ABC metaclasses."""

    pass


class VocabDeckABC(VocabDeck, metaclass=VocabDeckABCMeta):
    """Abstract base class combining VocabDeck functionality with ABC support.

    Use this for abstract interfaces, such as document backends, whose concrete implementations should share the
    VocabDeck logging and settings.
    """

    pass
