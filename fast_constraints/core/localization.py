"""
Violation message translation.

Callbacks pass message templates to the execution context. A template is
either a literal message or a translation key looked up in
`<LOCALE_PATH>/<locale>.json` (dot notation for nested keys). Named
parameters are interpolated with `str.format` in both cases.

Usage:
    from fast_constraints.core.localization import __, set_locale

    __('author.fake_name')                               # Translation key
    __('{value} is not allowed', {'value': 'FakeName'})  # Literal template
    set_locale('es')                                     # Change locale
"""

import json
import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

_translations: Dict[str, Dict[str, Any]] = {}
_LOCALE_DEFAULT = os.getenv('LOCALE_DEFAULT', 'en')
_LOCALE_FALLBACK = os.getenv('LOCALE_FALLBACK', 'en')
_LOCALE_PATH = os.getenv('LOCALE_PATH', os.path.join(os.getcwd(), 'lang'))
_current_locale: ContextVar[str] = ContextVar('locale', default=_LOCALE_DEFAULT)


def _get_nested(data: Dict[str, Any], key: str) -> Optional[str]:
    current = data
    for part in key.split('.'):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return None
    return current if isinstance(current, str) else None


def _load_locale(locale: str) -> Dict[str, Any]:
    """Load and cache translations for a locale."""
    if locale in _translations:
        return _translations[locale]

    locale_file = Path(_LOCALE_PATH) / f"{locale}.json"
    translations = {}

    if locale_file.exists():
        try:
            with locale_file.open(encoding='utf-8') as f:
                translations = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logging.warning(f"Unable to load translations from {locale_file}: {e}")

    _translations[locale] = translations
    return translations


def __(key: str, parameters: Optional[Dict[str, Any]] = None,
      default: Optional[str] = None, locale: Optional[str] = None) -> str:
    """
    Translate a message key and interpolate its parameters.

    Falls back to the fallback locale, then to `default`, then to the key
    itself. Interpolation errors leave the message uninterpolated.
    """
    current_locale = locale or _current_locale.get()

    translation = _get_nested(_load_locale(current_locale), key)

    if translation is None and current_locale != _LOCALE_FALLBACK:
        translation = _get_nested(_load_locale(_LOCALE_FALLBACK), key)

    if translation is None:
        translation = default or key

    if parameters:
        try:
            translation = translation.format(**parameters)
        except (KeyError, ValueError, IndexError, AttributeError, TypeError):
            logging.debug(f"Could not interpolate parameters {sorted(parameters)} into `{translation}`")

    return str(translation)


def has_translation(key: str, locale: Optional[str] = None) -> bool:
    current_locale = locale or _current_locale.get()
    if _get_nested(_load_locale(current_locale), key) is not None:
        return True
    return _get_nested(_load_locale(_LOCALE_FALLBACK), key) is not None


def trans_choice(key: str, count: int, parameters: Optional[Dict[str, Any]] = None) -> str:
    """
    Pluralised translation. `<key>_plural` is used when count != 1 and a
    translation exists for it; `count` is always available as a parameter.
    """
    params = (parameters or {}).copy()
    params['count'] = count

    if count != 1 and has_translation(f"{key}_plural"):
        return __(f"{key}_plural", params)

    return __(key, params)


def set_locale(locale: str) -> None:
    _current_locale.set(locale)


def get_locale() -> str:
    return _current_locale.get()


def clear_cache() -> None:
    _translations.clear()


def set_locale_path(path: str) -> None:
    global _LOCALE_PATH
    _LOCALE_PATH = path
    clear_cache()


trans = __

__all__ = [
    "__",
    "trans",
    "trans_choice",
    "has_translation",
    "set_locale",
    "get_locale",
    "clear_cache",
    "set_locale_path",
]
