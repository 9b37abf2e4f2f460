from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from liftlog.core.errors import BadRequestError


@dataclass(frozen=True)
class PartialUpdate:
    set_cols: str
    columns: list[str]
    values: list[Any]

    @property
    def assignments(self) -> dict[str, Any]:
        return dict(zip(self.columns, self.values))


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """Compile the SET clause of an UPDATE touching only the given fields.

    ``js_to_sql`` translates wire names to column names; fields missing from
    it are used as-is.

        >>> sql_for_partial_update({"bodyPart": "back", "target": "lats"}, {"bodyPart": "body_part"}).set_cols
        '"body_part"=:p1, "target"=:p2'
    """
    if not data:
        raise BadRequestError("No data")

    columns = [js_to_sql.get(key, key) for key in data]
    set_cols = ", ".join(f'"{column}"=:p{idx}' for idx, column in enumerate(columns, start=1))
    return PartialUpdate(set_cols=set_cols, columns=columns, values=list(data.values()))
