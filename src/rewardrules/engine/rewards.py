from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union
import random

from .modifiers import (
    Modifier, GrantItem, GrantXp, GrantXpRange, GrantStat, GrantStatRange,
    RemoveItems, Nothing, IfThenElse, RandomChoice, ChoiceEntry,
)
from .requirements import all_hold
from .trace import TraceSession

@dataclass(frozen=True)
class ItemGrant:
    item_key: str

@dataclass(frozen=True)
class XpGrant:
    amount: int

@dataclass(frozen=True)
class StatGrant:
    stat_type: str
    item_key: str
    amount: int

@dataclass(frozen=True)
class ClearInventory:
    pass

Grant = Union[ItemGrant, XpGrant, StatGrant, ClearInventory]

def describe(g: Grant) -> str:
    if isinstance(g, ItemGrant):
        return f"item {g.item_key}"
    if isinstance(g, XpGrant):
        return f"xp +{g.amount}"
    if isinstance(g, StatGrant):
        return f"{g.stat_type} {g.item_key} +{g.amount}"
    return "clear inventory"

class RewardResolver:
    """
    Flattens a parsed modifier tree into concrete grants.
    Ranges and random choices draw from the injected rng, so a seeded rng gives
    repeatable results. Nothing here mutates player state.
    """

    def __init__(self, rng: random.Random):
        self.rng = rng

    def resolve(self, modifiers: Sequence[Modifier]) -> Tuple[List[Grant], List[str]]:
        trace = TraceSession()
        grants: List[Grant] = []
        for m in modifiers:
            self._resolve_one(m, grants, trace)
        return grants, trace.dump()

    def pick(self, rc: RandomChoice, trace: TraceSession) -> ChoiceEntry | None:
        eligible: List[ChoiceEntry] = []
        for idx, entry in enumerate(rc.choices):
            ok, reason = all_hold(entry.requirements)
            if ok:
                eligible.append(entry)
            else:
                trace.note("Reward", f"choice #{idx} excluded: {reason}")
        if not eligible:
            trace.note("Reward", "random_choice has no eligible choices")
            return None
        total = sum(e.weight for e in eligible)
        roll = self.rng.randint(1, total)
        # walk in document order; the first entry whose cumulative weight reaches the roll wins
        acc = 0
        for entry in eligible:
            acc += entry.weight
            if roll <= acc:
                trace.note("Reward", f"random_choice roll {roll}/{total} → weight {entry.weight}")
                return entry
        raise RuntimeError(f"roll {roll} exceeds total weight {total}")

    def _resolve_one(self, m: Modifier, grants: List[Grant], trace: TraceSession) -> None:
        if isinstance(m, GrantItem):
            grants.append(ItemGrant(m.item_key))
        elif isinstance(m, GrantXp):
            grants.append(XpGrant(m.value))
        elif isinstance(m, GrantXpRange):
            amt = self.rng.randint(m.min, m.max)
            trace.note("Reward", f"xp range {m.min}..{m.max} → {amt}")
            grants.append(XpGrant(amt))
        elif isinstance(m, GrantStat):
            grants.append(StatGrant(m.stat_type, m.item_key, m.value))
        elif isinstance(m, GrantStatRange):
            amt = self.rng.randint(m.min, m.max)
            trace.note("Reward", f"{m.stat_type} {m.item_key} range {m.min}..{m.max} → {amt}")
            grants.append(StatGrant(m.stat_type, m.item_key, amt))
        elif isinstance(m, RemoveItems):
            grants.append(ClearInventory())
        elif isinstance(m, Nothing):
            pass
        elif isinstance(m, IfThenElse):
            ok, reason = all_hold(m.condition)
            trace.note("Reward", "if → then" if ok else f"if → else ({reason})")
            for sub in (m.then_branch if ok else m.else_branch):
                self._resolve_one(sub, grants, trace)
        elif isinstance(m, RandomChoice):
            entry = self.pick(m, trace)
            if entry is not None:
                for sub in entry.modifiers:
                    self._resolve_one(sub, grants, trace)
        else:
            raise TypeError(f"unsupported modifier {type(m).__name__}")
