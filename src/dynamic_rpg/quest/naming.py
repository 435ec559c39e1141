"""Quest-name rendering.

Templates use host-style placeholders (``"[${level}] explore ${map}"``).
They are compiled by a sandboxed Jinja2 environment whose variable
delimiters are ``${`` / ``}``, and only the four placeholders in
:data:`PLACEHOLDERS` may appear.
"""

from __future__ import annotations

from jinja2 import StrictUndefined, TemplateSyntaxError, meta
from jinja2.sandbox import SandboxedEnvironment

from dynamic_rpg.errors import ConfigurationError, EmptyInputError

PLACEHOLDERS = frozenset({"level", "map", "type", "target"})


def _make_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(
        variable_start_string="${",
        variable_end_string="}",
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


class QuestNameRenderer:
    """Compiles name templates once and renders them on demand."""

    def __init__(self, templates: list[str]) -> None:
        if not templates:
            raise EmptyInputError("At least one quest name template is required")
        self._env = _make_environment()
        self.templates = list(templates)
        self._compiled = [self._compile(t) for t in self.templates]

    def _compile(self, source: str):
        try:
            ast = self._env.parse(source)
        except TemplateSyntaxError as exc:
            raise ConfigurationError(
                f"Invalid quest name template {source!r}: {exc.message}"
            ) from exc
        unknown = meta.find_undeclared_variables(ast) - PLACEHOLDERS
        if unknown:
            raise ConfigurationError(
                f"Quest name template {source!r} uses unknown placeholders: "
                f"{', '.join(sorted(unknown))}"
            )
        return self._env.from_string(source)

    def render(self, index: int, *, level: str, map: str, type: str, target: str) -> str:
        """Render template number *index*."""
        return self._compiled[index].render(
            level=level, map=map, type=type, target=target,
        )


def validate_templates(templates: list[str]) -> None:
    """Raise :class:`ConfigurationError` unless every template compiles."""
    QuestNameRenderer(templates)
