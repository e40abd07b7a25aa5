"""Deep merge of a partial configuration onto a stored one."""

from __future__ import annotations

import copy
from typing import Any, Mapping, MutableMapping

from pydantic import BaseModel

from searchconf.config.schema import Config, field_for_key, section_shape


def deep_merge(
    base: Mapping[str, Any],
    update: Mapping[str, Any] | None,
    shape: type[BaseModel] | None = Config,
) -> dict[str, Any]:
    """Layer ``update`` on top of ``base`` and return the result as a new dict.

    For every key in ``update``:

    - a ``None`` value leaves the base value untouched;
    - a declared section is merged recursively when the update is a
      mapping, rebuilding it if the stored value is not a mapping;
    - a declared leaf is replaced outright;
    - an undeclared key is merged when both sides are mappings and
      replaced otherwise.

    Keys only present in ``base`` are kept. Declared keys given by
    attribute name (``"models"``) are written under their store key
    (``"MODELS"``). Neither argument is mutated.
    """
    result = copy.deepcopy(dict(base))
    if update is not None:
        _merge_into(result, update, shape)
    return result


def _merge_into(
    target: MutableMapping[str, Any],
    update: Mapping[str, Any],
    shape: type[BaseModel] | None,
) -> None:
    for key, value in update.items():
        if value is None:
            continue

        found = field_for_key(shape, key) if shape is not None else None
        if found is not None:
            name, field = found
            store_key = field.alias or name
            nested = section_shape(field)
        else:
            store_key = key
            nested = None

        existing = target.get(store_key)
        if isinstance(value, Mapping):
            if nested is not None:
                if not isinstance(existing, MutableMapping):
                    existing = target[store_key] = {}
                _merge_into(existing, value, nested)
                continue
            if found is None and isinstance(existing, MutableMapping):
                _merge_into(existing, value, None)
                continue
        target[store_key] = copy.deepcopy(value)
