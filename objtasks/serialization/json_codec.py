from __future__ import annotations

"""JSON helpers
---------------
`get_json` renders any plain object (dataclass, pydantic model, or anything
with a `__dict__`) as compact JSON text. `from_json` rebuilds an instance of a
given class from such text without calling the class constructor, so the
object gets the class's methods and exactly the attributes found in the JSON.
"""

import dataclasses
import json
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from objtasks.utils.logger import get_logger

log = get_logger(__name__)

T = TypeVar("T")


def _to_plain(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if hasattr(obj, "__dict__"):
        return dict(vars(obj))
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def get_json(obj: Any, *, indent: Optional[int] = None) -> str:
    """
    JSON text for `obj`.

        [1, 2, 3]            -> '[1,2,3]'
        Rectangle(10, 20)    -> '{"width":10,"height":20}'
    """
    if indent is None:
        return json.dumps(obj, default=_to_plain, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(obj, default=_to_plain, indent=indent, ensure_ascii=False)


def from_json(proto: Union[Type[T], T], text: str) -> T:
    """
    Rebuild an object of `proto`'s class from JSON text.

    `proto` may be the class itself or any instance of it. The constructor is
    bypassed; pydantic models go through `model_construct` instead, which
    keeps undeclared keys only when the model sets `extra="allow"`.
    """
    cls = proto if isinstance(proto, type) else type(proto)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON for {cls.__name__}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"JSON for {cls.__name__} must be an object, got {type(data).__name__}")

    if issubclass(cls, BaseModel):
        return cls.model_construct(**data)  # type: ignore[return-value]

    obj = cls.__new__(cls)
    for key, value in data.items():
        # object.__setattr__ also covers frozen dataclasses
        object.__setattr__(obj, key, value)
    log.debug("rebuilt %s with keys %s", cls.__name__, list(data))
    return obj
