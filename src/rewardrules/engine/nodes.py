from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable
import xml.etree.ElementTree as ET

@runtime_checkable
class Node(Protocol):
    """
    Read-only view over one element of a rule document.
    get_attribute returns None when the key is absent.
    """
    @property
    def name(self) -> str: ...

    def get_attribute(self, key: str) -> Optional[str]: ...

    @property
    def children(self) -> Sequence["Node"]: ...

class XmlNode:
    def __init__(self, element: ET.Element):
        self._el = element

    @property
    def name(self) -> str:
        return self._el.tag

    def get_attribute(self, key: str) -> Optional[str]:
        return self._el.get(key)

    @property
    def children(self) -> List["XmlNode"]:
        return [XmlNode(c) for c in self._el]

    def __repr__(self) -> str:
        return f"XmlNode({self._el.tag!r})"

def from_xml_string(text: str) -> XmlNode:
    return XmlNode(ET.fromstring(text))

def _attr_str(v: Any) -> str:
    # yaml turns ok: true into a bool; keep the document spelling
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)

class MappingNode:
    """
    Node over YAML/JSON data. Each element is a single-key mapping {name: body}:
      - body None        -> no attributes, no children
      - body list        -> children
      - body mapping     -> scalar entries are attributes, 'children' holds the child list
    """
    def __init__(self, name: str, attributes: Dict[str, str], children: List["MappingNode"]):
        self._name = name
        self._attributes = attributes
        self._children = children

    @property
    def name(self) -> str:
        return self._name

    def get_attribute(self, key: str) -> Optional[str]:
        return self._attributes.get(key)

    @property
    def children(self) -> List["MappingNode"]:
        return list(self._children)

    def __repr__(self) -> str:
        return f"MappingNode({self._name!r})"

def from_data(data: Any) -> MappingNode:
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"element must be a single-key mapping, got {data!r}")
    name, body = next(iter(data.items()))
    attrs: Dict[str, str] = {}
    kids: List[Any] = []
    if body is None:
        pass
    elif isinstance(body, list):
        kids = body
    elif isinstance(body, dict):
        for k, v in body.items():
            if k == "children":
                kids = v or []
            elif isinstance(v, (dict, list)):
                raise ValueError(f"attribute '{k}' of <{name}> must be a scalar")
            elif v is not None:
                attrs[str(k)] = _attr_str(v)
    else:
        raise ValueError(f"body of <{name}> must be null, a list or a mapping")
    return MappingNode(str(name), attrs, [from_data(k) for k in kids])
