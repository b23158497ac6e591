from __future__ import annotations

from typing import Any

from pydantic_core import to_jsonable_python

from . import console


def emit(value: Any, *, json_out: bool = False) -> None:
    data = to_jsonable_python(value, by_alias=True, exclude_none=True)
    if isinstance(data, (dict, list)) or json_out:
        console.print_json(data)
        return
    console.print(str(data), highlight=False, soft_wrap=True)
