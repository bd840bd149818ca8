from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Tuple
from rewardrules.engine.errors import ParseError
from rewardrules.engine.loader import iter_documents, load_modifiers
from rewardrules.engine.modifiers import Modifier
from rewardrules.engine.parser import RuleParser
from rewardrules.engine.trace import TraceSession

@dataclass
class ValidationReport:
    parsed: List[Tuple[Path, Tuple[Modifier, ...]]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

def _default_parser(trace: TraceSession) -> RuleParser:
    return RuleParser(trace=trace)

def validate_documents(paths: Iterable[Path], parser_factory: Callable[[TraceSession], RuleParser] = _default_parser) -> ValidationReport:
    """
    Parse every rule document under `paths`; one broken file does not stop the others.
    `parser_factory(trace)` must return a RuleParser writing its notes to `trace`.
    """
    report = ValidationReport()
    for root in paths:
        found = list(iter_documents(root))
        if not found:
            report.errors.append(f"{root}: no rule documents found")
            continue
        for fp in found:
            trace = TraceSession()
            try:
                mods = load_modifiers(fp, parser_factory(trace))
            except ParseError as e:
                report.errors.append(f"{fp}: {e}")
                continue
            report.parsed.append((fp, mods))
            report.warnings.extend(f"{fp}: {line}" for line in trace.dump())
    return report
