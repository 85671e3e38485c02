from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

from .config import EngineSettings
from .errors import UnsupportedLocaleError


class LocaleResolver:
    """Picks the per-language physical index for a base index name.

    ``current`` is either a fixed locale or a zero-argument callable returning
    the locale of the request being served; it is consulted whenever a caller
    omits the locale.
    """

    def __init__(
        self,
        supported: Iterable[str],
        current: Union[str, Callable[[], str]],
    ) -> None:
        self.supported = tuple(supported)
        if not self.supported:
            raise ValueError("At least one locale must be supported")
        self._current = current

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        current: Optional[Callable[[], str]] = None,
    ) -> "LocaleResolver":
        return cls(settings.supported_locales, current or settings.default_locale)

    def current_locale(self) -> str:
        return self._current() if callable(self._current) else self._current

    def resolve(self, locale: Optional[str] = None) -> str:
        locale = locale or self.current_locale()
        if locale not in self.supported:
            raise UnsupportedLocaleError(
                f"Locale {locale!r} is not one of {list(self.supported)}"
            )
        return locale

    def index_name_for(self, base_index: str, locale: Optional[str] = None) -> str:
        return f"{base_index}_{self.resolve(locale)}"
