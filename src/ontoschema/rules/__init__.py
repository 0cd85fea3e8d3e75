"""Rendered rules: the back-end agnostic output of the compiler."""

from .checker import RuleChecker
from .hooks import HookRegistry
from .models import Directive, DirectiveName, RenderedRule, RuleKind
from .renderer import render_record

__all__ = [
    "RuleChecker",
    "HookRegistry",
    "Directive",
    "DirectiveName",
    "RenderedRule",
    "RuleKind",
    "render_record",
]
