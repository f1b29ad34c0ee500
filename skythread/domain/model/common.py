"""Base model and lenient field types for all domain entities.

Thread documents come from an external API and are parsed into these models
directly. Field types below absorb malformed values instead of failing the
whole document, so a single bad post or facet degrades only itself.
"""

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Base class for all domain models.

    Models are immutable, populated from camelCase API payloads by alias and
    from snake_case keyword arguments by name. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return int(value)


def _byte_offset(value: Any) -> int | None:
    """Coerce an integral number or numeric string, None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def mapping_or_none(value: Any) -> Any:
    if isinstance(value, (dict, BaseModel)):
        return value
    return None


def mapping_items(value: Any) -> list[Any]:
    """Keep mapping items of a list; anything that is not a list is empty."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def mapping_items_or_empty(value: Any) -> list[Any]:
    """Like mapping_items, but replace non-mapping items with an empty one.

    Used where a malformed entry must stay visible to later stages (so it
    can be reported) rather than vanish at parse time.
    """
    if not isinstance(value, (list, tuple)):
        return []
    return [item if isinstance(item, (dict, BaseModel)) else {} for item in value]


OptionalStr = Annotated[str | None, BeforeValidator(_optional_str)]
Text = Annotated[str, BeforeValidator(_text)]
Count = Annotated[int, BeforeValidator(_count)]
ByteOffset = Annotated[int | None, BeforeValidator(_byte_offset)]


def mapping_or_empty(value: Any) -> Any:
    if isinstance(value, (dict, BaseModel)):
        return value
    return {}
