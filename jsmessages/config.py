"""Global configuration singleton for jsmessages.

Reads settings from environment variables by default.  When embedded in a
host application, the caller can populate the singleton *before* the first
request so that nothing has to live in the process environment.

    from jsmessages.config import settings
    settings.JSMESSAGES_LOCALES_DIR = "/srv/app/locales"
"""

import os
from pathlib import Path
from typing import Optional

PROJ_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_LOCALES_DIR = PROJ_ROOT / 'static' / 'locales'


class Settings:
    """Lightweight mutable config, one global instance."""

    JSMESSAGES_LOCALES_DIR: Optional[str] = None
    JSMESSAGES_DEFAULT_LANG: Optional[str] = None
    JSMESSAGES_FALLBACK_LANG: Optional[str] = None
    JSMESSAGES_NAMESPACE: Optional[str] = None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the attribute value if set, otherwise fall back to env."""
        value = getattr(self, name, None)
        if value is not None:
            return str(value)
        return os.getenv(name) or default

    @property
    def locales_dir(self) -> Path:
        return Path(self.get('JSMESSAGES_LOCALES_DIR') or DEFAULT_LOCALES_DIR)

    @property
    def default_lang(self) -> str:
        return self.get('JSMESSAGES_DEFAULT_LANG', 'en')

    @property
    def fallback_lang(self) -> Optional[str]:
        """Unset means each source falls back to its own default language."""
        return self.get('JSMESSAGES_FALLBACK_LANG')

    @property
    def namespace(self) -> str:
        return self.get('JSMESSAGES_NAMESPACE', 'window.Messages')


settings = Settings()
