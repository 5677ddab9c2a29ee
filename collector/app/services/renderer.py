import math
from collections.abc import Iterable
from typing import Any

from collector.app.core.errors import RenderError
from collector.app.schemas import MetricResponseItem

_LABEL_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def format_value(value: Any) -> str:
    """Textual form of a metric value, whether the platform sent a string or a number.

    Floats keep Python's shortest round-trip form (``42.0``, ``1e+16``);
    non-finite floats render as ``NaN``, ``+Inf`` and ``-Inf``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "+Inf" if value > 0 else "-Inf"
    if isinstance(value, (int, float)):
        return repr(value)
    raise RenderError(f"Unsupported metric value {value!r} ({type(value).__name__})")


def escape_label(value: str) -> str:
    return value.translate(_LABEL_ESCAPES)


def format_line(metric_id: str, object_name: str, value: Any) -> str:
    return f'{metric_id}{{name="{escape_label(object_name)}"}}={format_value(value)}'


def render(items: Iterable[MetricResponseItem]) -> list[str]:
    """Flatten metric results into one line per (object, metric) sample."""
    lines: list[str] = []
    for item in items:
        for sample in item.value:
            try:
                lines.append(format_line(sample.metric_id, item.object_name, sample.metric_value))
            except RenderError as exc:
                raise RenderError(f"{item.object_name}/{sample.metric_id}: {exc}") from exc
    return lines
