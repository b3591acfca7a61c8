"""Truncation options: recognised keys, process defaults and call overloads.

Options may be given as a ``TruncationOptions`` instance or as a plain
mapping using either snake_case names or their camelCase aliases
(``byWords``, ``keepWords`` ...). Everything is normalised once here,
before the truncation core runs.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from preview.core.config import settings

logger = logging.getLogger(__name__)

# Max characters appended to finish a split word when keep_words is True
DEFAULT_EXTEND_CHARS = 10


@dataclass(frozen=True)
class CutPolicy:
    """How a cut that lands inside a word is adjusted.

    - ``exact``: cut at the limit, possibly splitting the word.
    - ``extend``: finish the word, appending at most ``max_chars``.
    - ``trim``: drop the partial word back to the previous boundary.
    """

    mode: Literal["exact", "extend", "trim"] = "exact"
    max_chars: int = 0

    @classmethod
    def from_keep_words(cls, keep_words: bool | int) -> "CutPolicy":
        if not keep_words:
            return cls("exact")
        if keep_words is True:
            return cls("extend", DEFAULT_EXTEND_CHARS)
        if keep_words < 0:
            return cls("trim")
        return cls("extend", keep_words)


def coerce_length(value: Any) -> int | None:
    """Turn a caller-supplied length into an int, or None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    return None


class TruncationOptions(BaseModel):
    length: int | None = None
    ellipsis: str = "..."
    by_words: bool = False
    keep_words: bool | int = False
    keep_whitespaces: bool = False
    strip_tags: bool = False
    decode_entities: bool = False
    excludes: tuple[str, ...] = ()

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @field_validator("length", mode="before")
    @classmethod
    def _coerce_length(cls, value):
        return coerce_length(value)

    @field_validator("excludes", mode="before")
    @classmethod
    def _split_excludes(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        return tuple(s.strip() for s in value if s and s.strip())

    @property
    def cut_policy(self) -> CutPolicy:
        return CutPolicy.from_keep_words(self.keep_words)

    @property
    def is_noop(self) -> bool:
        """True when the length cannot produce any truncation."""
        return self.length is None or self.length <= 0


def _field_lookup() -> dict[str, str]:
    lookup = {}
    for name, field in TruncationOptions.model_fields.items():
        lookup[name] = name
        if field.alias:
            lookup[field.alias] = name
    return lookup


_FIELDS = _field_lookup()


def _normalize(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map alias keys to field names; drop unknown keys and None values."""
    out = {}
    for key, value in raw.items():
        name = _FIELDS.get(key)
        if name is None:
            logger.warning("Ignoring unknown truncation option %r", key)
            continue
        if value is not None:
            out[name] = value
    return out


def _settings_defaults() -> TruncationOptions:
    return TruncationOptions(
        ellipsis=settings.PREVIEW_ELLIPSIS,
        by_words=settings.PREVIEW_BY_WORDS,
        keep_whitespaces=settings.PREVIEW_KEEP_WHITESPACES,
        decode_entities=settings.PREVIEW_DECODE_ENTITIES,
    )


_defaults = _settings_defaults()


def get_defaults() -> TruncationOptions:
    return _defaults


def configure(
    defaults: Mapping[str, Any] | None = None, **kwargs: Any
) -> TruncationOptions:
    """Merge caller defaults into the recognised-options table.

    Only defaults live at module level; per-call budget state never does.
    """
    global _defaults
    updates = _normalize({**(defaults or {}), **kwargs})
    _defaults = TruncationOptions.model_validate(
        {**_defaults.model_dump(), **updates}
    )
    return _defaults


def reset_defaults() -> TruncationOptions:
    """Restore the settings-derived defaults."""
    global _defaults
    _defaults = _settings_defaults()
    return _defaults


def resolve_options(length: Any = None, options: Any = None) -> TruncationOptions:
    """Resolve the ``(length, options)`` call overload into one record.

    - ``resolve_options({"length": 10, ...})``: the mapping is the options.
    - ``resolve_options(10, {...})``: ``10`` overrides the options' length.
    """
    if isinstance(length, TruncationOptions):
        return length
    if isinstance(options, TruncationOptions):
        return options.model_copy(update={"length": coerce_length(length)})

    if isinstance(length, Mapping):
        raw = dict(length)
    else:
        raw = dict(options or {})
        raw["length"] = length
    return TruncationOptions.model_validate(
        {**_defaults.model_dump(), **_normalize(raw)}
    )
