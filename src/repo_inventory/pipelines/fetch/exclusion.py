"""Repository exclusion rules."""

import re

from pydantic import BaseModel, ConfigDict

from repo_inventory.bitbucketcloud.models import BitbucketRepo
from repo_inventory.core.exceptions import ConfigurationError
from repo_inventory.core.models.connection import ExclusionRule


class _CompiledRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None
    id: str | None
    pattern: re.Pattern[str] | None

    def matches(self, repo: BitbucketRepo) -> bool:
        if self.name is not None and repo.full_name.lower() == self.name:
            return True
        if self.id is not None and repo.uuid == self.id:
            return True
        if self.pattern is not None and self.pattern.search(repo.full_name):
            return True
        return False


class ExclusionFilter:
    """Decides whether a repository should be dropped from a listing.

    Rules are compiled once; an invalid pattern raises ConfigurationError
    here rather than while filtering.
    """

    def __init__(self, rules: list[ExclusionRule] | None = None) -> None:
        self._rules = [self._compile(rule) for rule in rules or [] if not rule.is_empty]

    @staticmethod
    def _compile(rule: ExclusionRule) -> _CompiledRule:
        pattern = None
        if rule.pattern:
            try:
                pattern = re.compile(rule.pattern)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid exclusion pattern {rule.pattern!r}: {e}",
                    details={"pattern": rule.pattern},
                ) from e

        return _CompiledRule(
            name=rule.name.lower() if rule.name else None,
            id=str(rule.id) if rule.id else None,
            pattern=pattern,
        )

    def __len__(self) -> int:
        return len(self._rules)

    def should_exclude(self, repo: BitbucketRepo) -> bool:
        return any(rule.matches(repo) for rule in self._rules)
