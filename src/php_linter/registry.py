from typing import Iterable, Optional

from .rules.base import BaseTokenRule


class RuleRegistry:
    """Registry for managing and loading linting rules"""

    def __init__(self):
        self._rules: list[BaseTokenRule] = []
        self._load_builtin_rules()

    def register(self, rule: BaseTokenRule):
        self._rules.append(rule)

    def get_all_rules(self) -> list[BaseTokenRule]:
        return self._rules

    def get_enabled_rules(
        self,
        select: Optional[Iterable[str]] = None,
        ignore: Optional[Iterable[str]] = None,
    ) -> list[BaseTokenRule]:
        """Rules whose id starts with a selected prefix and no ignored one.

        An empty or missing `select` enables every rule.
        """
        select = list(select or [])
        ignore = list(ignore or [])
        enabled = []
        for rule in self._rules:
            if select and not any(rule.rule_id.startswith(prefix) for prefix in select):
                continue
            if any(rule.rule_id == prefix or rule.rule_id.startswith(prefix + ".") for prefix in ignore):
                continue
            enabled.append(rule)
        return enabled

    def _load_builtin_rules(self):
        from .rules.switch_rules import SwitchDeclarationRule

        self.register(SwitchDeclarationRule())


registry = RuleRegistry()
