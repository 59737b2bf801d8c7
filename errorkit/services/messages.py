"""Runtime store for localized response messages and preferences.

The catalog maps a language code to its messages::

    {
        "en": {
            "NOT_FOUND": "Resource not found.",
            "dupes": {"email": "Email already exists."},
            "validation": {"password": "Password is too short."},
            "general": {"error": "Something went wrong."},
        }
    }

``dupes``, ``validation`` and ``general`` are the named sub-categories
the error resolver reads; every other key is a message code.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"

Catalog = Dict[str, Dict[str, Any]]


def _string_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


@dataclass
class Preferences:
    accepted_languages: List[str] = field(default_factory=lambda: [FALLBACK_LANGUAGE])
    no_dupes_allowed_of: List[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Preferences":
        """Build preferences from camelCase or snake_case keys; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            return cls()
        languages = data.get("acceptedLanguages", data.get("accepted_languages"))
        dupes = data.get("noDupesAllowedof", data.get("no_dupes_allowed_of"))
        return cls(
            accepted_languages=_string_list(languages) if languages is not None else [FALLBACK_LANGUAGE],
            no_dupes_allowed_of=_string_list(dupes),
        )


class LanguagePack:
    """Read-only view over one language branch of the catalog.

    Missing branches and values that are not strings read as ``None``.
    """

    def __init__(self, messages: Optional[Mapping[str, Any]] = None):
        self._messages = messages if isinstance(messages, Mapping) else {}

    def __bool__(self) -> bool:
        return bool(self._messages)

    def _category(self, name: str) -> Mapping[str, Any]:
        category = self._messages.get(name)
        return category if isinstance(category, Mapping) else {}

    def message(self, code: str) -> Optional[str]:
        value = self._messages.get(code)
        return value if isinstance(value, str) else None

    def duplicate(self, field_name: str) -> Optional[str]:
        value = self._category("dupes").get(field_name)
        return value if isinstance(value, str) else None

    def validation(self, field_name: str) -> Optional[str]:
        value = self._category("validation").get(field_name)
        return value if isinstance(value, str) else None

    def general_error(self) -> Optional[str]:
        value = self._category("general").get("error")
        return value if isinstance(value, str) else None


class MessageStore:
    """Holds the current catalog and preferences.

    ``configure`` replaces both wholesale; the getters hand out the live
    objects, not copies.
    """

    def __init__(self, responses: Optional[Catalog] = None, prefs: Union[Preferences, Mapping[str, Any], None] = None):
        self._responses: Catalog = {}
        self._prefs = Preferences()
        if responses is not None or prefs is not None:
            self.configure(responses, prefs)

    def configure(self, responses: Optional[Catalog] = None, prefs: Union[Preferences, Mapping[str, Any], None] = None) -> None:
        if isinstance(prefs, Preferences):
            new_prefs = prefs
        else:
            new_prefs = Preferences.from_mapping(prefs)
        if isinstance(responses, dict):
            new_responses = responses
        elif isinstance(responses, Mapping):
            new_responses = dict(responses)
        else:
            new_responses = {}
        self._responses = new_responses
        self._prefs = new_prefs
        logger.debug(f"Message store configured: languages={list(new_responses)}")

    def load_file(self, path: str) -> None:
        """Configure from a JSON file shaped ``{"responses": ..., "prefs": ...}``."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            logger.warning(f"Ignoring responses file {path}: top level is not an object")
            data = {}
        self.configure(data.get("responses"), data.get("prefs"))

    def get_responses(self) -> Catalog:
        return self._responses

    def get_prefs(self) -> Preferences:
        return self._prefs

    def set_message(self, lang: str, code: str, message: str) -> None:
        if not isinstance(self._responses.get(lang), dict):
            self._responses[lang] = {}
        self._responses[lang][code] = message

    def get_message(self, lang: str, code: str, fallback: Optional[str] = None) -> Optional[str]:
        """Look up ``code`` in ``lang``, then English, then return ``fallback``."""
        for candidate in (lang, FALLBACK_LANGUAGE):
            pack = self._responses.get(candidate)
            if isinstance(pack, Mapping) and isinstance(pack.get(code), str):
                return pack[code]
        return fallback

    def language_pack(self, lang: str) -> LanguagePack:
        pack = self._responses.get(lang) or self._responses.get(FALLBACK_LANGUAGE) or {}
        return LanguagePack(pack)


default_store = MessageStore()


def configure(responses: Optional[Catalog] = None, prefs: Union[Preferences, Mapping[str, Any], None] = None) -> None:
    default_store.configure(responses, prefs)


def conf() -> Catalog:
    return default_store.get_responses()


def get_prefs() -> Preferences:
    return default_store.get_prefs()


def set_message(lang: str, code: str, message: str) -> None:
    default_store.set_message(lang, code, message)


def get_message(lang: str, code: str, fallback: Optional[str] = None) -> Optional[str]:
    return default_store.get_message(lang, code, fallback)
