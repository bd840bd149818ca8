from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence
import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree
from rewardrules.engine.errors import ParseError
from rewardrules.engine.loader import load_modifiers
from rewardrules.engine.modifiers import Modifier, IfThenElse, RandomChoice
from rewardrules.engine.parser import RuleParser
from rewardrules.engine.requirements import Requirement, AndRequirement
from rewardrules.engine.rewards import RewardResolver, describe
from rewardrules.engine.settings import Settings, load_settings, SETTINGS_PATH
from rewardrules.tools.validate import validate_documents

app = typer.Typer(add_completion=False)

SettingsOpt = typer.Option(None, "--settings", help=f"Settings file (default {SETTINGS_PATH})")

def _settings(path: Optional[Path]) -> Settings:
    return load_settings(path) if path else load_settings()

def _label(node: Modifier | Requirement) -> str:
    fields = node.model_dump(exclude={"kind", "condition", "then_branch", "else_branch", "choices", "children"})
    args = " ".join(f"{k}={v}" for k, v in fields.items())
    return escape(f"{node.kind} {args}".rstrip())

def _add_requirements(parent: Tree, reqs: Sequence[Requirement]) -> None:
    for r in reqs:
        ok, reason = r.evaluate()
        mark = "[green]✓[/]" if ok else f"[red]✗ {escape(reason)}[/]"
        branch = parent.add(f"{_label(r)} {mark}")
        if isinstance(r, AndRequirement):
            _add_requirements(branch, r.children)

def _add_modifiers(parent: Tree, mods: Sequence[Modifier]) -> None:
    for m in mods:
        branch = parent.add(_label(m))
        if isinstance(m, IfThenElse):
            _add_requirements(branch.add("if"), m.condition)
            _add_modifiers(branch.add("then"), m.then_branch)
            _add_modifiers(branch.add("else"), m.else_branch)
        elif isinstance(m, RandomChoice):
            for entry in m.choices:
                c = branch.add(f"choice weight={entry.weight}")
                _add_requirements(c.add("requirement"), entry.requirements)
                _add_modifiers(c.add("modifier"), entry.modifiers)

def render_tree(title: str, mods: Sequence[Modifier]) -> Tree:
    tree = Tree(title)
    _add_modifiers(tree, mods)
    return tree

@app.command()
def validate(paths: List[Path] = typer.Argument(...), settings_path: Optional[Path] = SettingsOpt):
    """Parse rule documents (files or folders) and report every malformed one."""
    s = _settings(settings_path)
    report = validate_documents(paths, lambda trace: RuleParser.from_settings(s, trace))
    for msg in report.warnings:
        typer.echo(f"[WARN] {msg}")
    for msg in report.errors:
        typer.echo(f"[ERROR] {msg}", err=True)
    if not report.ok:
        raise typer.Exit(code=1)
    typer.echo(f"{len(report.parsed)} document(s) validated successfully.")

@app.command()
def show(path: Path, settings_path: Optional[Path] = SettingsOpt):
    s = _settings(settings_path)
    try:
        mods = load_modifiers(path, RuleParser.from_settings(s))
    except ParseError as e:
        typer.echo(f"[ERROR] {path}: {e}", err=True)
        raise typer.Exit(code=1)
    Console().print(render_tree(str(path), mods))

@app.command()
def roll(
    path: Path,
    seed: Optional[int] = typer.Option(None, "--seed"),
    times: int = typer.Option(1, "--times", min=1),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    settings_path: Optional[Path] = SettingsOpt,
):
    """Resolve the rewards a document would hand out."""
    s = _settings(settings_path)
    try:
        mods = load_modifiers(path, RuleParser.from_settings(s))
    except ParseError as e:
        typer.echo(f"[ERROR] {path}: {e}", err=True)
        raise typer.Exit(code=1)
    resolver = RewardResolver(s.make_rng(seed))
    for i in range(times):
        grants, logs = resolver.resolve(mods)
        if verbose:
            for line in logs:
                typer.echo(line)
        typer.echo(f"#{i + 1}: " + (", ".join(describe(g) for g in grants) or "nothing"))

@app.command("export-schemas")
def export_schemas_cmd(out: Path = typer.Option(Path("docs/schemas"), "--out")):
    from rewardrules.tools.export_schemas import export_schemas
    export_schemas(out)
    typer.echo(f"Exported schemas to {out}")

if __name__ == "__main__":
    app()
