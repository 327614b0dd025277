"""Base común de schemas HTTP (camelCase en el cable)."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Acepta snake_case o camelCase al entrar; serializa en camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteRes(CamelModel):
    id: UUID
    deleted: bool
