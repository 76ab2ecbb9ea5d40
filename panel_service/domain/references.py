"""
Polymorphic entity references.

Activity actors and subjects can point at any registered entity type. They are
stored as a (type tag, id) pair and resolved through ``morph_map()``.
"""

from dataclasses import dataclass
from typing import Dict, Type

from sqlmodel import SQLModel


@dataclass(frozen=True)
class ActorReference:
    type: str
    id: str

    @classmethod
    def for_model(cls, model: SQLModel) -> "ActorReference":
        return cls(type=morph_type_for(model), id=str(model.id))


def _build_morph_map() -> Dict[str, Type[SQLModel]]:
    from panel_service.domain.entities.user import User

    return {"user": User}


_morph_map: Dict[str, Type[SQLModel]] = {}


def morph_map() -> Dict[str, Type[SQLModel]]:
    """Type tag -> entity class registry."""
    if not _morph_map:
        _morph_map.update(_build_morph_map())
    return _morph_map


def morph_type_for(model: SQLModel) -> str:
    for type_tag, model_cls in morph_map().items():
        if isinstance(model, model_cls):
            return type_tag
    raise ValueError(f"{type(model).__name__} is not a registered activity actor type")

