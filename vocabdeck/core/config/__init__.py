"""
Core configuration module for VocabDeck.

Provides centralized configuration management with support for directory paths,
environment variables, and INI defaults shipped with the package.
"""

from vocabdeck.core.config.config import CoreSettings, get_settings, reset_settings

__all__ = ["CoreSettings", "get_settings", "reset_settings"]
