"""
Annotation plans (YAML → a batch of dot-plot edits).

Example::

    kind: dotplot.annotation.v1
    mirror: true
    probabilities:
      - {first: 0, second: 8, probability: 0.25}
    annotations:
      - kind: ucross
        structure: "(((...)))"
        color: [1, 0, 0]
      - kind: obox
        pair: [2, 6]
        color: [0, 0, 1]
"""
from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .annotations import AnnotationKind
from .errors import DotPlotError
from .model import DotPlot

LOGGER = logging.getLogger(__name__)

PLAN_KIND = "dotplot.annotation.v1"


class AnnotationPlanError(ValueError):
    """Raised when an annotation plan is invalid."""


@dataclass(frozen=True)
class ProbabilityUpdate:
    first: int
    second: int
    probability: float


@dataclass(frozen=True)
class AnnotationStep:
    kind: AnnotationKind
    color: Tuple[float, float, float]
    structure: Optional[str] = None
    pair: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class AnnotationPlan:
    mirror: bool
    probabilities: Tuple[ProbabilityUpdate, ...]
    annotations: Tuple[AnnotationStep, ...]


def load_annotation_plan(path: str | Path) -> AnnotationPlan:
    plan_path = Path(path)
    if not plan_path.exists():
        raise AnnotationPlanError(f"Annotation plan '{plan_path}' not found.")
    try:
        data = yaml.safe_load(plan_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise AnnotationPlanError(f"Annotation plan '{plan_path}' is not valid YAML: {exc}") from exc
    return parse_annotation_plan(data)


def parse_annotation_plan(data: Any) -> AnnotationPlan:
    if not isinstance(data, dict):
        raise AnnotationPlanError("Annotation plan must be a YAML mapping.")
    kind = str(data.get("kind", "")).strip()
    if kind != PLAN_KIND:
        raise AnnotationPlanError(f"Unknown annotation plan kind. Supported kinds: '{PLAN_KIND}'.")
    probabilities = tuple(
        _parse_probability(idx, entry) for idx, entry in enumerate(_entries(data, "probabilities"))
    )
    annotations = tuple(_parse_step(idx, entry) for idx, entry in enumerate(_entries(data, "annotations")))
    return AnnotationPlan(
        mirror=bool(data.get("mirror", False)),
        probabilities=probabilities,
        annotations=annotations,
    )


def _entries(data: Dict[str, Any], section: str) -> List[Any]:
    entries = data.get(section)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise AnnotationPlanError(f"'{section}' must be a list.")
    return entries


def _index(value: Any) -> int:
    # YAML booleans and floats are not base indices.
    if isinstance(value, bool):
        raise TypeError(f"base index must be an integer, got {value!r}")
    return operator.index(value)


def _parse_probability(idx: int, entry: Any) -> ProbabilityUpdate:
    if not isinstance(entry, dict):
        raise AnnotationPlanError(f"probabilities[{idx}] must be a mapping.")
    try:
        return ProbabilityUpdate(
            first=_index(entry["first"]),
            second=_index(entry["second"]),
            probability=float(entry["probability"]),
        )
    except KeyError as exc:
        raise AnnotationPlanError(f"probabilities[{idx}] requires '{exc.args[0]}'.") from exc
    except (TypeError, ValueError) as exc:
        raise AnnotationPlanError(f"probabilities[{idx}] is invalid: {exc}") from exc


def _parse_step(idx: int, entry: Any) -> AnnotationStep:
    if not isinstance(entry, dict):
        raise AnnotationPlanError(f"annotations[{idx}] must be a mapping.")
    try:
        kind = AnnotationKind.coerce(entry.get("kind"))
    except DotPlotError as exc:
        raise AnnotationPlanError(f"annotations[{idx}]: {exc}") from exc
    color = entry.get("color")
    if not isinstance(color, (list, tuple)) or len(color) != 3:
        raise AnnotationPlanError(f"annotations[{idx}] requires 'color: [r, g, b]'.")
    structure = entry.get("structure")
    pair = entry.get("pair")
    if (structure is None) == (pair is None):
        raise AnnotationPlanError(f"annotations[{idx}] needs exactly one of 'structure' or 'pair'.")
    if pair is not None and (not isinstance(pair, (list, tuple)) or len(pair) != 2):
        raise AnnotationPlanError(f"annotations[{idx}] 'pair' must be [first, second].")
    try:
        return AnnotationStep(
            kind=kind,
            color=(float(color[0]), float(color[1]), float(color[2])),
            structure=str(structure) if structure is not None else None,
            pair=(_index(pair[0]), _index(pair[1])) if pair is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise AnnotationPlanError(f"annotations[{idx}] is invalid: {exc}") from exc


def apply_annotation_plan(dotplot: DotPlot, plan: AnnotationPlan) -> None:
    """Apply mirror, then probabilities, then annotations, in file order."""

    if plan.mirror:
        dotplot.mirror()
    for update in plan.probabilities:
        dotplot.set_base_pair_probability(update.first, update.second, update.probability)
    for step in plan.annotations:
        if step.structure is not None:
            dotplot.annotate_from_structure(step.structure, step.kind, *step.color)
        else:
            dotplot.set_colored_entry(step.kind, step.pair[0], step.pair[1], *step.color)
    LOGGER.debug(
        "applied plan mirror=%s probabilities=%d annotations=%d",
        plan.mirror,
        len(plan.probabilities),
        len(plan.annotations),
    )


__all__ = [
    "AnnotationPlan",
    "AnnotationPlanError",
    "AnnotationStep",
    "PLAN_KIND",
    "ProbabilityUpdate",
    "apply_annotation_plan",
    "load_annotation_plan",
    "parse_annotation_plan",
]
