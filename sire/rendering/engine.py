"""Template rendering engine."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined

from ..core.models import TemplateContext

logger = logging.getLogger(__name__)


class TemplateReadError(OSError):
    """Raised when a template file cannot be read as UTF-8 text."""


class RenderError(ValueError):
    """Raised when a template fails to render."""


@lru_cache(maxsize=2)
def _environment(newline_sequence: str) -> Environment:
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        newline_sequence=newline_sequence,
    )


def _detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def _is_literal(env: Environment, text: str) -> bool:
    markers = (
        env.variable_start_string,
        env.block_start_string,
        env.comment_start_string,
    )
    return not any(marker in text for marker in markers)


def render_text(
    template_text: str, context: TemplateContext | Mapping[str, Any]
) -> str:
    """Render template text against a context.

    Text without any template markup is returned unchanged, line endings
    included. Any exception raised while compiling or evaluating the
    template is reported as ``RenderError``.

    Args:
        template_text: Jinja2 template source
        context: Template context or a prepared mapping

    Returns:
        Rendered text
    """
    env = _environment(_detect_newline(template_text))
    if _is_literal(env, template_text):
        return template_text

    if isinstance(context, TemplateContext):
        variables = context.as_render_context()
    else:
        variables = dict(context)

    try:
        return env.from_string(template_text).render(**variables)
    except Exception as e:
        raise RenderError(f"{type(e).__name__}: {e}") from e


def read_template(template_path: Path) -> str:
    """Read a template file without translating line endings.

    Args:
        template_path: Path to the template file

    Returns:
        Template source text
    """
    try:
        with template_path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateReadError(f"Cannot read template {template_path}: {e}") from e


def render_file(
    template_path: Path, context: TemplateContext | Mapping[str, Any]
) -> str:
    """Read and render a single template file.

    Args:
        template_path: Path to the template file
        context: Template context data

    Returns:
        Rendered text
    """
    logger.debug(f"Rendering template: {template_path}")
    return render_text(read_template(template_path), context)
