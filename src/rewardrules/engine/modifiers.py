from __future__ import annotations
from typing import Literal, Tuple, Union
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, model_validator
from .requirements import Requirement

class _ModifierBase(BaseModel):
    model_config = ConfigDict(frozen=True)

class GrantItem(_ModifierBase):
    kind: Literal["grant_item"] = "grant_item"
    item_key: str

class GrantXp(_ModifierBase):
    kind: Literal["grant_xp"] = "grant_xp"
    value: int

class GrantXpRange(_ModifierBase):
    kind: Literal["grant_xp_range"] = "grant_xp_range"
    min: int
    max: int

    @model_validator(mode="after")
    def _validate(self):
        if self.min > self.max:
            raise ValueError(f"grant_xp_range requires min <= max (got {self.min} > {self.max})")
        return self

class GrantStat(_ModifierBase):
    kind: Literal["grant_stat"] = "grant_stat"
    stat_type: str
    item_key: str
    value: int

class GrantStatRange(_ModifierBase):
    kind: Literal["grant_stat_range"] = "grant_stat_range"
    stat_type: str
    item_key: str
    min: int
    max: int

    @model_validator(mode="after")
    def _validate(self):
        if self.min > self.max:
            raise ValueError(f"grant_stat_range requires min <= max (got {self.min} > {self.max})")
        return self

class RemoveItems(_ModifierBase):
    kind: Literal["remove_items"] = "remove_items"

class Nothing(_ModifierBase):
    kind: Literal["nothing"] = "nothing"

class IfThenElse(_ModifierBase):
    kind: Literal["if_then_else"] = "if_then_else"
    condition: Tuple[Requirement, ...] = ()
    then_branch: Tuple["Modifier", ...] = ()
    else_branch: Tuple["Modifier", ...] = ()

class ChoiceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: int = Field(gt=0)
    modifiers: Tuple["Modifier", ...] = ()
    requirements: Tuple[Requirement, ...] = ()

class RandomChoice(_ModifierBase):
    kind: Literal["random_choice"] = "random_choice"
    choices: Tuple[ChoiceEntry, ...] = ()

    @property
    def total_weight(self) -> int:
        return sum(c.weight for c in self.choices)

Modifier = Annotated[
    Union[
        GrantItem, GrantXp, GrantXpRange,
        GrantStat, GrantStatRange,
        RemoveItems, Nothing,
        IfThenElse, RandomChoice,
    ],
    Field(discriminator="kind")
]

IfThenElse.model_rebuild()
ChoiceEntry.model_rebuild()
RandomChoice.model_rebuild()
