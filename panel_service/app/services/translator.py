"""
Translation lookup for user-facing strings.

Strings live in ``panel_service/lang/<locale>.yaml`` as nested mappings and are
addressed with dotted keys (``passwords.token``). Placeholders use the
``:name`` form and are replaced from the ``replace`` mapping, longest names
first so ``:directory`` is not clobbered by ``:dir``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

LANG_PATH = Path(__file__).resolve().parent.parent.parent / "lang"
DEFAULT_LOCALE = "en"


@lru_cache(maxsize=None)
def load_catalog(locale: str) -> Dict[str, Any]:
    path = LANG_PATH / f"{locale}.yaml"
    if not path.exists():
        logger.warning(f"No translation catalog for locale '{locale}'")
        return {}
    with open(path, "r") as r_file:
        return yaml.safe_load(r_file) or {}


def trans(
    key: str,
    replace: Optional[Mapping[str, Any]] = None,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Resolve a dotted translation key.

    Returns the key itself when it does not resolve to a string.
    """
    node: Any = load_catalog(locale)
    for segment in key.split("."):
        if not isinstance(node, dict) or segment not in node:
            return key
        node = node[segment]

    if not isinstance(node, str):
        return key

    if replace:
        for name in sorted(replace, key=len, reverse=True):
            node = node.replace(f":{name}", str(replace[name]))

    return node
