"""Qualified type name parsing and resolution using Lark."""

import builtins
import importlib
import logging
import os
from dataclasses import dataclass
from typing import Any

from lark import Lark, LarkError
from lark.visitors import Transformer

from .errors import TypeNotFound

logger = logging.getLogger(__name__)

_g_parser: Lark | None = None


@dataclass(frozen=True, slots=True)
class QualifiedName:
    """A parsed type name.

    ``qualname`` is only set for the explicit ``module:Qual.Name`` form;
    a plain dotted name leaves the module/attribute split open.
    """

    module: str
    qualname: str | None = None

    @property
    def parts(self) -> list[str]:
        return self.module.split(".")


class QualnameTransformer(Transformer):
    """Transform parse tree into a QualifiedName."""

    def dotted(self, args: list[Any]) -> str:
        return ".".join(str(a) for a in args)

    def start(self, args: list[Any]) -> QualifiedName:
        if len(args) == 2:
            return QualifiedName(module=args[0], qualname=args[1])
        return QualifiedName(module=args[0])


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/qualname.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar, parser="lalr", transformer=QualnameTransformer())
    return _g_parser


def parse_qualname(text: str) -> QualifiedName:
    """Parse a qualified type name.

    Raises:
        TypeNotFound: if the text is not a syntactically valid name.
    """
    try:
        return _parser().parse(text.strip())
    except LarkError as ex:
        raise TypeNotFound(text, "invalid type name") from ex


def qualified_name(cls: type) -> str:
    """Return the dotted name used to display a class."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def matches_qualname(cls: type, text: str) -> bool:
    """Check whether a name (in any accepted form) denotes ``cls``."""
    try:
        name = parse_qualname(text)
    except TypeNotFound:
        return False
    if name.qualname is not None:
        return name.module == cls.__module__ and name.qualname == cls.__qualname__
    return name.module == qualified_name(cls)


def _walk(obj: Any, attrs: list[str]) -> Any:
    for attr in attrs:
        obj = getattr(obj, attr, None)
        if obj is None:
            return None
    return obj


def resolve_qualname(text: str) -> type:
    """Resolve a qualified name to exactly one class.

    Plain dotted names are tried at every module/attribute split point;
    all successful splits must agree on the same class.

    Raises:
        TypeNotFound: if nothing, or more than one distinct class, matches.
    """
    name = parse_qualname(text)

    if name.qualname is not None:
        try:
            module = importlib.import_module(name.module)
        except ImportError as ex:
            raise TypeNotFound(text, f"cannot import {name.module}") from ex
        found = _walk(module, name.qualname.split("."))
        if not isinstance(found, type):
            raise TypeNotFound(text)
        return found

    parts = name.parts
    candidates: list[type] = []

    if len(parts) == 1:
        found = getattr(builtins, parts[0], None)
        if isinstance(found, type):
            candidates.append(found)

    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        found = _walk(module, parts[split:])
        if isinstance(found, type) and found not in candidates:
            candidates.append(found)

    if not candidates:
        raise TypeNotFound(text)
    if len(candidates) > 1:
        logger.debug("Ambiguous type name %s: %s", text, candidates)
        raise TypeNotFound(text, f"ambiguous, matches {len(candidates)} types")
    return candidates[0]
