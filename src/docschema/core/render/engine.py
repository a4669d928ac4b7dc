#!/usr/bin/env python3
"""
Purpose:
    Hands a finished `SchemaModel` to Jinja2 templates. The schema pipeline has
    no dependency on this module; it only consumes the model.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from docschema.core.constants import DEFAULT_TEMPLATE, DEFAULT_TEXT_ENCODING
from docschema.core.schema.indexes import NameDisambiguator
from docschema.core.schema.model import SchemaModel
from docschema.core.utils import to_lower_camel, to_snake

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_FILTERS: Dict[str, Any] = {
    "snake": to_snake,
    "upper_snake": lambda s: to_snake(s).upper(),
    "lower_camel": to_lower_camel,
}


def label_constants(model: SchemaModel) -> List[Tuple[str, str]]:
    """
    (constant name, storage path) for every labelled field, in field order.

    Distinct labels can collapse to the same upper-snake name
    (`detail_status` and `Detail.Status`), so names are disambiguated again
    after conversion:

        detail_status, Detail.Status -> DETAIL_STATUS, DETAIL_STATUS2
    """
    names = NameDisambiguator()
    return [
        (names.claim(to_snake(f.label).upper()), f.storage_path)
        for f in model.fields if f.label
    ]


def _build_env(
    templates_roots: Iterable[Path],
    extra_filters: Optional[Dict[str, Any]] = None
) -> Environment:
    # user roots first so they can shadow built-in templates
    loaders = [FileSystemLoader(str(Path(p).resolve())) for p in templates_roots]
    loaders.append(FileSystemLoader(str(BUILTIN_TEMPLATES_DIR)))
    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters.update(DEFAULT_FILTERS)
    env.globals["label_constants"] = label_constants
    if extra_filters:
        env.filters.update(extra_filters)
    return env


def output_name(model: SchemaModel, template_name: str) -> str:
    """
    Generated file name for a model/template pair.

    Example:
        (Task, "labels.py.j2") -> "task_labels_gen.py"
    """
    base = Path(template_name).name
    if base.endswith(".j2"):
        base = base[: -len(".j2")]
    stem, dot, ext = base.partition(".")
    return f"{to_snake(model.record_name)}_{stem}_gen{dot}{ext}"


class RenderEngine:
    """
    Stateless engine object holding a Jinja Environment.
    Prefer using render_schema() for a one-shot convenience wrapper.
    """

    def __init__(self, templates_roots: Iterable[Path] = (), filters: Optional[Dict[str, Any]] = None):
        self.env = _build_env(templates_roots, filters)

    def render(self, template_name: str, model: SchemaModel, **extra: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(schema=model, **extra)


def render_schema(
    model: SchemaModel,
    *,
    template_name: str = DEFAULT_TEMPLATE,
    templates_roots: Iterable[Path] = (),
    output_dir: Optional[Union[str, Path]] = None,
    app_version: str = "",
) -> Union[str, Path]:
    """
    Render `model` through `template_name`.

    Returns the rendered text, or the written file path when `output_dir` is
    given.

    Raises:
        jinja2.TemplateNotFound: if no root provides the template.
        OSError: for I/O failures.
    """
    engine = RenderEngine(templates_roots)
    text = engine.render(template_name, model, app_version=app_version)
    if output_dir is None:
        return text

    out = Path(output_dir) / output_name(model, template_name)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
    logger.info("wrote %s", out)
    return out
