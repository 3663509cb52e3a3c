import os

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_MAX_PASSES = 10


class LintConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    rules: tuple[str, ...] | None = None
    max_passes: int = Field(default=_DEFAULT_MAX_PASSES, ge=1)


def _split_list(value: str | None) -> tuple[str, ...] | None:
    if not value:
        return None
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or None


def load_config(rules: list[str] | None = None, max_passes: int | None = None) -> LintConfig:
    """Build the effective config: explicit arguments win over the environment.

    ``REACT19_LINT_RULES`` selects rule ids (comma-separated, default: all rules).
    ``REACT19_LINT_MAX_PASSES`` bounds the number of fix passes per file.
    """
    env_rules = _split_list(os.getenv("REACT19_LINT_RULES"))
    env_passes = os.getenv("REACT19_LINT_MAX_PASSES")

    resolved_passes = max_passes
    if resolved_passes is None and env_passes:
        try:
            resolved_passes = int(env_passes)
        except ValueError:
            raise ValueError(f"REACT19_LINT_MAX_PASSES must be an integer, got {env_passes!r}") from None

    return LintConfig(
        rules=tuple(rules) if rules else env_rules,
        max_passes=resolved_passes if resolved_passes is not None else _DEFAULT_MAX_PASSES,
    )
