"""Static translation bundles.

Bundles live in ``locales/<locale>.json`` and map a namespace to a tree of
keys. ``init_i18n()`` loads every bundle once at process start; lookups go
through ``translate()`` with an explicit locale and fall back to English,
then to the key itself.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"

SUPPORTED_LOCALES = ("en", "de", "fr", "it", "zh", "th")
FALLBACK_LOCALE = "en"
NAMESPACES = ("translation", "common", "booking", "flights", "auth")
DEFAULT_NAMESPACE = "translation"

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

# Populated once by init_i18n(); never reassigned afterwards.
_catalog: Optional[Dict[str, dict]] = None


def _load_bundle(locale: str) -> dict:
    path = LOCALES_DIR / f"{locale}.json"
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def init_i18n() -> Dict[str, dict]:
    """Load all locale bundles. Calling it again returns the catalog already loaded."""
    global _catalog
    if _catalog is not None:
        return _catalog

    _catalog = {locale: _load_bundle(locale) for locale in SUPPORTED_LOCALES}
    logger.info(f"Loaded translations for {', '.join(SUPPORTED_LOCALES)}")
    return _catalog


def is_initialized() -> bool:
    return _catalog is not None


def _lookup(locale: str, namespace: str, key: str) -> Optional[str]:
    node = _catalog.get(locale, {}).get(namespace, {})
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def translate(key: str, namespace: str = DEFAULT_NAMESPACE, locale: str = FALLBACK_LOCALE, **params) -> str:
    if _catalog is None:
        raise RuntimeError("Translations are not loaded; call init_i18n() at startup")

    value = _lookup(locale, namespace, key)
    if value is None and locale != FALLBACK_LOCALE:
        value = _lookup(FALLBACK_LOCALE, namespace, key)
    if value is None:
        return key

    # values are inserted as-is, no escaping
    return _PLACEHOLDER.sub(lambda m: str(params.get(m.group(1), m.group(0))), value)
