from __future__ import annotations
import re
import sys
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING
from .nodes import Node
from .trace import TraceSession
from .errors import (
    UnknownModifierKind, UnknownRequirementKind, MissingAttribute, InvalidNumericAttribute,
    InvalidBooleanAttribute, InvalidRange, MissingBranch, DuplicateBranch, DocumentTooDeep,
)
from .modifiers import (
    Modifier, GrantItem, GrantXp, GrantXpRange, GrantStat, GrantStatRange,
    RemoveItems, Nothing, IfThenElse, RandomChoice, ChoiceEntry,
)
from .requirements import (
    Requirement, TrueRequirement, FalseRequirement, FriendsRequirement,
    LevelRequirement, ItemRequirement, StatRequirement, AndRequirement,
)
if TYPE_CHECKING:
    from .settings import Settings

Path = Tuple[str, ...]

DEFAULT_MAX_DEPTH = 64

# each nested element costs up to four interpreter frames; leave room for the caller
_FRAMES_PER_LEVEL = 4
_FRAME_HEADROOM = 200

def max_depth_ceiling() -> int:
    return max(1, (sys.getrecursionlimit() - _FRAME_HEADROOM) // _FRAMES_PER_LEVEL)

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)
_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}

# -------- attribute readers --------

def _attr(node: Node, key: str, here: Path) -> str:
    raw = node.get_attribute(key)
    if raw is None or raw == "":
        raise MissingAttribute(key, element=node.name, path=here)
    return raw

def _int_attr(node: Node, key: str, here: Path) -> int:
    raw = _attr(node, key, here)
    if not _INT_RE.fullmatch(raw):
        raise InvalidNumericAttribute(key, raw, element=node.name, path=here)
    return int(raw)

def _positive_int_attr(node: Node, key: str, here: Path) -> int:
    val = _int_attr(node, key, here)
    if val <= 0:
        raise InvalidNumericAttribute(key, str(val), element=node.name, path=here, why="not a positive integer")
    return val

def _opt_int_attr(node: Node, key: str, default: int, here: Path) -> int:
    if not node.get_attribute(key):
        return default
    return _int_attr(node, key, here)

def _bool_attr(node: Node, key: str, default: bool, here: Path) -> bool:
    raw = node.get_attribute(key)
    if raw is None or raw == "":
        return default
    s = raw.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise InvalidBooleanAttribute(key, raw, element=node.name, path=here)

def _opt_str(node: Node, key: str, default: str) -> str:
    raw = node.get_attribute(key)
    return default if raw is None else raw

def _range(node: Node, here: Path) -> Tuple[int, int]:
    lo = _int_attr(node, "min", here)
    hi = _int_attr(node, "max", here)
    if lo > hi:
        raise InvalidRange(lo, hi, element=node.name, path=here)
    return lo, hi

# -------- requirement builders --------

def _and(p: "RuleParser", node: Node, here: Path) -> AndRequirement:
    return AndRequirement(children=tuple(p.parse_a_requirement(c, here) for c in node.children))

def _true_requirement(p: "RuleParser", node: Node, here: Path) -> TrueRequirement:
    return TrueRequirement(ok=_bool_attr(node, "ok", True, here), reason=_opt_str(node, "reason", ""))

def _false_requirement(p: "RuleParser", node: Node, here: Path) -> FalseRequirement:
    return FalseRequirement(ok=_bool_attr(node, "ok", False, here), reason=_opt_str(node, "reason", "always fails"))

def _friends_requirement(p: "RuleParser", node: Node, here: Path) -> FriendsRequirement:
    return FriendsRequirement(
        required=_int_attr(node, "required", here),
        ok=_bool_attr(node, "ok", True, here),
        reason=_opt_str(node, "reason", ""),
    )

def _level_requirement(p: "RuleParser", node: Node, here: Path) -> LevelRequirement:
    return LevelRequirement(
        level=_int_attr(node, "level", here),
        ok=_bool_attr(node, "ok", True, here),
        reason=_opt_str(node, "reason", ""),
    )

def _item_requirement(p: "RuleParser", node: Node, here: Path) -> ItemRequirement:
    return ItemRequirement(
        item_key=_attr(node, "ikey", here),
        number=_opt_int_attr(node, "number", 1, here),
        ok=_bool_attr(node, "ok", True, here),
        reason=_opt_str(node, "reason", ""),
    )

def _stat_requirement(p: "RuleParser", node: Node, here: Path) -> StatRequirement:
    return StatRequirement(
        stat_type=_attr(node, "type", here),
        item_key=_attr(node, "ikey", here),
        value=_int_attr(node, "value", here),
        ok=_bool_attr(node, "ok", True, here),
        reason=_opt_str(node, "reason", ""),
    )

RequirementBuilder = Callable[["RuleParser", Node, Path], Requirement]

REQUIREMENT_BUILDERS: Dict[str, RequirementBuilder] = {
    "and": _and,
    "true_requirement": _true_requirement,
    "false_requirement": _false_requirement,
    "friends_requirement": _friends_requirement,
    "level_requirement": _level_requirement,
    "item_requirement": _item_requirement,
    "stat_requirement": _stat_requirement,
}

# -------- modifier builders --------

def _grant_item(p: "RuleParser", node: Node, here: Path) -> GrantItem:
    return GrantItem(item_key=_attr(node, "ikey", here))

def _grant_xp(p: "RuleParser", node: Node, here: Path) -> GrantXp:
    return GrantXp(value=_int_attr(node, "value", here))

def _grant_xp_range(p: "RuleParser", node: Node, here: Path) -> GrantXpRange:
    lo, hi = _range(node, here)
    return GrantXpRange(min=lo, max=hi)

def _grant_stat(p: "RuleParser", node: Node, here: Path) -> GrantStat:
    return GrantStat(
        stat_type=_attr(node, "type", here),
        item_key=_attr(node, "ikey", here),
        value=_int_attr(node, "value", here),
    )

def _grant_stat_range(p: "RuleParser", node: Node, here: Path) -> GrantStatRange:
    stat_type = _attr(node, "type", here)
    item_key = _attr(node, "ikey", here)
    lo, hi = _range(node, here)
    return GrantStatRange(stat_type=stat_type, item_key=item_key, min=lo, max=hi)

def _remove_items(p: "RuleParser", node: Node, here: Path) -> RemoveItems:
    return RemoveItems()

def _nothing(p: "RuleParser", node: Node, here: Path) -> Nothing:
    return Nothing()

_BRANCHES = ("if", "then", "else")

def _if_then_else(p: "RuleParser", node: Node, here: Path) -> IfThenElse:
    # branches are located by name, so their order in the document is free
    found: Dict[str, Node] = {}
    for child in node.children:
        if child.name not in _BRANCHES:
            p.unexpected_child(child, here)
            continue
        if child.name in found:
            raise DuplicateBranch(child.name, element=node.name, path=here)
        found[child.name] = child
    for branch in _BRANCHES:
        if branch not in found:
            raise MissingBranch(branch, element=node.name, path=here)
    return IfThenElse(
        condition=tuple(p.parse_requirement_list(found["if"], here)),
        then_branch=tuple(p.parse_modifier_list(found["then"], here)),
        else_branch=tuple(p.parse_modifier_list(found["else"], here)),
    )

def _choice(p: "RuleParser", node: Node, path: Path) -> ChoiceEntry:
    here = p.enter(node, path)
    weight: Optional[int] = None
    modifiers: Tuple[Modifier, ...] = ()
    requirements: Tuple[Requirement, ...] = ()
    for child in node.children:
        if child.name == "weight":
            weight = _positive_int_attr(child, "weight", p.enter(child, here))
        elif child.name == "modifier":
            modifiers = tuple(p.parse_modifier_list(child, here))
        elif child.name == "requirement":
            requirements = tuple(p.parse_requirement_list(child, here))
        else:
            p.unexpected_child(child, here)
    if weight is None:
        # compact form: <choice weight="78">
        weight = _positive_int_attr(node, "weight", here)
    return ChoiceEntry(weight=weight, modifiers=modifiers, requirements=requirements)

def _random_choice(p: "RuleParser", node: Node, here: Path) -> RandomChoice:
    entries = []
    for child in node.children:
        if child.name != "choice":
            p.unexpected_child(child, here)
            continue
        entries.append(_choice(p, child, here))
    return RandomChoice(choices=tuple(entries))

ModifierBuilder = Callable[["RuleParser", Node, Path], Modifier]

MODIFIER_BUILDERS: Dict[str, ModifierBuilder] = {
    "grant_item": _grant_item,
    "grant_xp": _grant_xp,
    "grant_xp_range": _grant_xp_range,
    "grant_stat": _grant_stat,
    "grant_stat_range": _grant_stat_range,
    "remove_items": _remove_items,
    "nothing": _nothing,
    "if_then_else": _if_then_else,
    "random_choice": _random_choice,
}

# -------- facade --------

class RuleParser:
    """
    Turns rule documents into Modifier/Requirement trees.

    The four parse_* entry points are mutually recursive. The parser keeps only
    configuration; the element path travels through the recursion as an argument,
    so one instance can be shared across threads. `trace` is an optional sink for
    '[Parse]' notes about ignored elements.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        *,
        strict_unknown_children: bool = False,
        trace: Optional[TraceSession] = None,
        modifier_builders: Optional[Dict[str, ModifierBuilder]] = None,
        requirement_builders: Optional[Dict[str, RequirementBuilder]] = None,
    ):
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        if max_depth > max_depth_ceiling():
            raise ValueError(f"max_depth must be <= {max_depth_ceiling()} at the current recursion limit")
        self.max_depth = max_depth
        self.strict_unknown_children = strict_unknown_children
        self.trace = trace
        self.modifier_builders = dict(modifier_builders or MODIFIER_BUILDERS)
        self.requirement_builders = dict(requirement_builders or REQUIREMENT_BUILDERS)

    @classmethod
    def from_settings(cls, settings: "Settings", trace: Optional[TraceSession] = None) -> "RuleParser":
        return cls(settings.max_depth, strict_unknown_children=settings.strict_unknown_children, trace=trace)

    def enter(self, node: Node, path: Path) -> Path:
        here = path + (node.name,)
        if len(here) > self.max_depth:
            raise DocumentTooDeep(self.max_depth, element=node.name, path=here)
        return here

    def unexpected_child(self, child: Node, here: Path) -> None:
        if self.strict_unknown_children:
            raise UnknownModifierKind(f"unexpected <{child.name}> inside <{here[-1]}>", element=child.name, path=here + (child.name,))
        if self.trace is not None:
            self.trace.note("Parse", f"ignoring <{child.name}> in {'/'.join(here)}")

    def parse_a_modifier(self, node: Node, path: Path = ()) -> Modifier:
        here = self.enter(node, path)
        builder = self.modifier_builders.get(node.name)
        if builder is None:
            raise UnknownModifierKind(f"unknown modifier kind '{node.name}'", element=node.name, path=here)
        return builder(self, node, here)

    def parse_modifier_list(self, node: Node, path: Path = ()) -> Tuple[Modifier, ...]:
        here = self.enter(node, path)
        return tuple(self.parse_a_modifier(c, here) for c in node.children)

    def parse_a_requirement(self, node: Node, path: Path = ()) -> Requirement:
        here = self.enter(node, path)
        builder = self.requirement_builders.get(node.name)
        if builder is None:
            raise UnknownRequirementKind(f"unknown requirement kind '{node.name}'", element=node.name, path=here)
        return builder(self, node, here)

    def parse_requirement_list(self, node: Node, path: Path = ()) -> Tuple[Requirement, ...]:
        here = self.enter(node, path)
        return tuple(self.parse_a_requirement(c, here) for c in node.children)

_default_parser = RuleParser()

def parse_a_modifier(node: Node) -> Modifier:
    return _default_parser.parse_a_modifier(node)

def parse_modifier_list(node: Node) -> Tuple[Modifier, ...]:
    return _default_parser.parse_modifier_list(node)

def parse_a_requirement(node: Node) -> Requirement:
    return _default_parser.parse_a_requirement(node)

def parse_requirement_list(node: Node) -> Tuple[Requirement, ...]:
    return _default_parser.parse_requirement_list(node)
