from __future__ import annotations
from typing import Literal, Tuple, Union
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field

Outcome = Tuple[bool, str]  # (ok, reason); reason is "" when ok

class _RequirementBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def evaluate(self) -> Outcome:
        raise NotImplementedError

# Atomic requirements carry the ok/reason the server precomputed for them.
class _Declared(_RequirementBase):
    ok: bool = True
    reason: str = ""

    def evaluate(self) -> Outcome:
        if self.ok:
            return True, ""
        return False, self.reason or f"{self.kind} not met"

class TrueRequirement(_Declared):
    kind: Literal["true_requirement"] = "true_requirement"

class FalseRequirement(_Declared):
    kind: Literal["false_requirement"] = "false_requirement"
    ok: bool = False
    reason: str = "always fails"

class FriendsRequirement(_Declared):
    kind: Literal["friends_requirement"] = "friends_requirement"
    required: int

class LevelRequirement(_Declared):
    kind: Literal["level_requirement"] = "level_requirement"
    level: int

class ItemRequirement(_Declared):
    kind: Literal["item_requirement"] = "item_requirement"
    item_key: str
    number: int = 1

class StatRequirement(_Declared):
    kind: Literal["stat_requirement"] = "stat_requirement"
    stat_type: str
    item_key: str
    value: int

class AndRequirement(_RequirementBase):
    """Conjunction; reports the reason of the first failing child in document order."""
    kind: Literal["and"] = "and"
    children: Tuple["Requirement", ...] = ()

    def evaluate(self) -> Outcome:
        ok, reason = True, ""
        for child in self.children:
            c_ok, c_reason = child.evaluate()
            if not c_ok and ok:
                ok, reason = False, c_reason
        return ok, reason

Requirement = Annotated[
    Union[
        TrueRequirement, FalseRequirement, FriendsRequirement,
        LevelRequirement, ItemRequirement, StatRequirement,
        AndRequirement,
    ],
    Field(discriminator="kind")
]

AndRequirement.model_rebuild()

def all_hold(requirements: Tuple[Requirement, ...]) -> Outcome:
    return AndRequirement(children=tuple(requirements)).evaluate()
