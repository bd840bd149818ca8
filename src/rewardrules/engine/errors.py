from __future__ import annotations
from typing import Tuple

class ParseError(ValueError):
    """
    Raised while turning a rule document into modifier/requirement trees.
    Carries the offending element name and the element path from the parse root.
    """
    def __init__(self, message: str, *, element: str = "", path: Tuple[str, ...] = ()):
        self.message = message
        self.element = element
        self.path = tuple(path)
        super().__init__(self.render())

    def render(self) -> str:
        where = "/".join(self.path) or self.element or "<root>"
        return f"{where}: {self.message}"

class UnknownModifierKind(ParseError):
    pass

class UnknownRequirementKind(ParseError):
    pass

class MissingAttribute(ParseError):
    def __init__(self, key: str, *, element: str = "", path: Tuple[str, ...] = ()):
        self.key = key
        super().__init__(f"<{element}> is missing required attribute '{key}'", element=element, path=path)

class InvalidNumericAttribute(ParseError):
    def __init__(self, key: str, raw: str, *, element: str = "", path: Tuple[str, ...] = (), why: str = "not an integer"):
        self.key = key
        self.raw = raw
        super().__init__(f"<{element}> attribute '{key}'={raw!r} is {why}", element=element, path=path)

class InvalidBooleanAttribute(ParseError):
    def __init__(self, key: str, raw: str, *, element: str = "", path: Tuple[str, ...] = ()):
        self.key = key
        self.raw = raw
        super().__init__(f"<{element}> attribute '{key}'={raw!r} is not a boolean", element=element, path=path)

class InvalidRange(ParseError):
    def __init__(self, lo: int, hi: int, *, element: str = "", path: Tuple[str, ...] = ()):
        self.min = lo
        self.max = hi
        super().__init__(f"<{element}> has min {lo} > max {hi}", element=element, path=path)

class MissingBranch(ParseError):
    def __init__(self, branch: str, *, element: str = "if_then_else", path: Tuple[str, ...] = ()):
        self.branch = branch
        super().__init__(f"<{element}> is missing its <{branch}> branch", element=element, path=path)

class DuplicateBranch(ParseError):
    def __init__(self, branch: str, *, element: str = "if_then_else", path: Tuple[str, ...] = ()):
        self.branch = branch
        super().__init__(f"<{element}> has more than one <{branch}> branch", element=element, path=path)

class DocumentTooDeep(ParseError):
    def __init__(self, max_depth: int, *, element: str = "", path: Tuple[str, ...] = ()):
        self.max_depth = max_depth
        super().__init__(f"document nesting exceeds max_depth={max_depth}", element=element, path=path)

class UnsupportedDocument(ParseError):
    pass
