import json
import logging
from pathlib import Path
from typing import Optional

from core.errors import MissingResourceError
from core.folder_setup import folder_setup
from core.types import KeywordDictionary

log = logging.getLogger()


def load_keyword_dictionary(path: Optional[Path] = None) -> KeywordDictionary:
    """
    Load the include/exclude keyword lists used to classify material vector parameters.

    Args:
        path: Dictionary file, defaults to the bundled one.

    Raises:
        MissingResourceError: If the file is missing, unreadable or malformed.
    """

    path = Path(path) if path else folder_setup.dictionary_file
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise MissingResourceError(f"Failed to load filter dictionary {path}") from e

    if not isinstance(data, dict) or not isinstance(data.get("include_keywords"), list) \
            or not isinstance(data.get("exclude_exact", []), list):
        raise MissingResourceError(f"Filter dictionary {path} has no keyword lists")

    dictionary = KeywordDictionary.from_dict(data)
    log.debug(f"Loaded {len(dictionary.include_keywords)} include keyword(s) "
              f"and {len(dictionary.exclude_exact)} exact exclusion(s) from {path}")
    return dictionary
