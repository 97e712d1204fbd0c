from __future__ import annotations

import json
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from pxref.core import config
from pxref.core.errors import FormatError

LEGACY_KEYS = {"ref_png": "palette_image_path", "ref_matrix": "frames"}

Coordinate = Annotated[int, Field(strict=True, ge=0, le=config.GRID_SIZE - 1)]
ReferencePair = tuple[Coordinate, Coordinate]
Column = Annotated[
    list[Optional[ReferencePair]],
    Field(min_length=config.GRID_SIZE, max_length=config.GRID_SIZE),
]
FrameGrid = Annotated[
    list[Column],
    Field(min_length=config.GRID_SIZE, max_length=config.GRID_SIZE),
]


class _SchemaModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _ReferenceFileModel(_SchemaModel):
    palette_image_path: str | None = None
    frames: list[FrameGrid] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for legacy, current in LEGACY_KEYS.items():
            if legacy in data and current not in data:
                data[current] = data.pop(legacy)
        return data


def validate_reference_payload(
    payload: Any, *, source: str = "reference file"
) -> tuple[str | None, list[list[list[tuple[int, int] | None]]]]:
    try:
        validated = _ReferenceFileModel.model_validate(payload)
    except ValidationError as exc:
        raise FormatError.from_pydantic(source, exc) from exc
    return validated.palette_image_path, [
        [list(column) for column in frame] for frame in validated.frames
    ]


def parse_reference_bytes(
    data: bytes, *, source: str = "reference file"
) -> tuple[str | None, list[list[list[tuple[int, int] | None]]]]:
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FormatError(source, f"{source} is not valid JSON: {exc}") from exc
    return validate_reference_payload(payload, source=source)
