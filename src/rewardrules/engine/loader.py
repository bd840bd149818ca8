from __future__ import annotations
from pathlib import Path
from typing import Iterable, Optional, Tuple
import json
import xml.etree.ElementTree as ET
import yaml
from .errors import UnsupportedDocument
from .nodes import Node, XmlNode, from_data
from .modifiers import Modifier
from .parser import RuleParser

DOC_EXTS: Tuple[str, ...] = (".xml", ".json", ".yaml", ".yml")

def _load_file(path: Path) -> object:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text) or {}
    return json.loads(text)

def load_document(path: Path) -> Node:
    suffix = path.suffix.lower()
    if suffix not in DOC_EXTS:
        raise UnsupportedDocument(f"unsupported document type '{suffix}'", element=path.name)
    try:
        if suffix == ".xml":
            try:
                return XmlNode(ET.parse(path).getroot())
            except ET.ParseError as e:
                raise UnsupportedDocument(f"malformed XML: {e}", element=path.name) from e
        try:
            return from_data(_load_file(path))
        except (ValueError, yaml.YAMLError) as e:
            raise UnsupportedDocument(f"malformed document: {e}", element=path.name) from e
    except OSError as e:
        raise UnsupportedDocument(f"cannot read document: {e.strerror or e}", element=path.name) from e

def load_modifiers(path: Path, parser: Optional[RuleParser] = None) -> Tuple[Modifier, ...]:
    """Parse a document whose root (e.g. <modifiers>) holds a modifier list."""
    return (parser or RuleParser()).parse_modifier_list(load_document(path))

def iter_documents(root: Path, exts: Tuple[str, ...] = DOC_EXTS) -> Iterable[Path]:
    if not root.exists():
        return []
    if root.is_file():
        return [root]
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in exts)
