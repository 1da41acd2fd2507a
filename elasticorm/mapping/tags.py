from dataclasses import dataclass
from typing import Dict, Optional

from elasticorm.exceptions import InvalidOptionError

# Analyzer assigned by case_sensitive=false
CASE_INSENSITIVE_ANALYZER = "case_insensitive_ref_id"

OPTION_TYPE = "type"
OPTION_ANALYZER = "analyzer"
OPTION_SORTABLE = "sortable"
OPTION_ID = "id"
OPTION_REF_ID = "ref_id"
OPTION_CASE_SENSITIVE = "case_sensitive"

_FLAG_OPTIONS = {OPTION_SORTABLE, OPTION_ID, OPTION_REF_ID}


@dataclass(frozen=True)
class FieldOptions:
    """Decoded elasticorm tag of one field."""

    type: Optional[str] = None
    analyzer: Optional[str] = None
    sortable: bool = False
    is_id: bool = False
    ref_id: bool = False
    case_sensitive: Optional[bool] = None

    @property
    def effective_analyzer(self) -> Optional[str]:
        if self.case_sensitive is False:
            return CASE_INSENSITIVE_ANALYZER
        return self.analyzer


def parse_options(tag: str) -> Dict[str, str]:
    """Parse ``key=value,flag`` into a mapping; flags map to an empty string."""
    options: Dict[str, str] = {}
    if not tag:
        return options
    for definition in tag.split(","):
        definition = definition.strip()
        if not definition:
            continue
        key, _, value = definition.partition("=")
        options[key.strip()] = value.strip()
    return options


def decode_options(tag: str) -> FieldOptions:
    """
    Parse and validate an elasticorm tag.

    Args:
        tag: Tag string, e.g. ``"ref_id,case_sensitive=false"``

    Returns:
        Decoded field options

    Raises:
        InvalidOptionError: On unknown keys, invalid values or conflicting options
    """
    values = {}
    for key, value in parse_options(tag).items():
        if key in _FLAG_OPTIONS:
            if value:
                raise InvalidOptionError(key, value, "option takes no value")
            values[_flag_attribute(key)] = True
        elif key in (OPTION_TYPE, OPTION_ANALYZER):
            if not value:
                raise InvalidOptionError(key, value, "option requires a value")
            values[key] = value
        elif key == OPTION_CASE_SENSITIVE:
            if value not in ("true", "false"):
                raise InvalidOptionError(key, value, "value must be true or false")
            values["case_sensitive"] = value == "true"
        else:
            raise InvalidOptionError(key, value)

    options = FieldOptions(**values)
    if (
        options.case_sensitive is False
        and options.analyzer
        and options.analyzer != CASE_INSENSITIVE_ANALYZER
    ):
        raise InvalidOptionError(
            OPTION_CASE_SENSITIVE, "false", f"analyzer {options.analyzer} is already set"
        )
    return options


def _flag_attribute(key: str) -> str:
    return "is_id" if key == OPTION_ID else key
