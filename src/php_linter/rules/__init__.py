from .base import BaseTokenRule, ViolationSink
from .switch_rules import SwitchDeclarationRule

__all__ = ["BaseTokenRule", "SwitchDeclarationRule", "ViolationSink"]
