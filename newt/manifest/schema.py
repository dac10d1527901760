"""Manifest schema: conforms parsed ``template.yaml`` data to a TemplateManifest.

A directory transform entry is a positional sequence::

    [src, target?, files?, delims?, opts*]

``target``, ``files`` and ``delims`` are each optional, so an entry is
matched against an ordered list of alternatives for the elements that
follow ``src``/``target``, longest first. Every failing field is
reported, and a failing entry lists where each alternative stopped
matching.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from ..core.errors import Problem, SchemaViolation
from ..core.models import DirSpec, Opt, TemplateManifest

logger = logging.getLogger(__name__)

Loc = tuple[str | int, ...]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def is_files(value: Any) -> bool:
    return isinstance(value, Mapping) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


def is_delims(value: Any) -> bool:
    return (
        _is_sequence(value)
        and len(value) == 2
        and all(isinstance(part, str) for part in value)
    )


def is_opt(value: Any) -> bool:
    return Opt.parse(value) is not None


def is_plain_string(value: Any) -> bool:
    return isinstance(value, str) and not is_opt(value)


# component name -> (predicate, human readable expectation)
COMPONENTS: dict[str, tuple[Callable[[Any], bool], str]] = {
    "files": (is_files, "a mapping of string to string"),
    "delims": (is_delims, "a pair of [open, close] delimiter strings"),
    "opts": (is_opt, 'an option keyword ":only" or ":raw"'),
}

# Alternatives for the elements after src/target, tried in order.
# Each ends with any number of option keywords.
ALTERNATIVES: tuple[tuple[str, ...], ...] = (
    ("files", "delims"),
    ("files",),
    ("delims",),
    (),
)


def _alternative_name(fixed: tuple[str, ...]) -> str:
    return "+".join((*fixed, "opts*"))


def _match_alternative(
    fixed: tuple[str, ...], rest: Sequence[Any], offset: int
) -> tuple[dict[str, Any] | None, str | None]:
    """Match ``rest`` against one alternative.

    Returns the matched components, or None and a description of where
    the alternative failed.
    """
    matched: dict[str, Any] = {}
    for position, component in enumerate(fixed):
        predicate, expected = COMPONENTS[component]
        if position >= len(rest):
            return None, f"at [{offset + position}]: {component} missing"
        if not predicate(rest[position]):
            return None, (
                f"at [{offset + position}]: expected {component} as {expected},"
                f" got {rest[position]!r}"
            )
        matched[component] = rest[position]

    opts: set[Opt] = set()
    predicate, expected = COMPONENTS["opts"]
    for position in range(len(fixed), len(rest)):
        element = rest[position]
        if not predicate(element):
            return None, (
                f"at [{offset + position}]: expected {expected}, got {element!r}"
            )
        opts.add(Opt.parse(element))  # type: ignore[arg-type]
    matched["opts"] = frozenset(opts)
    return matched, None


def conform_dir_spec(entry: Any, path: Loc = ()) -> DirSpec:
    """Conform one positional transform entry to a DirSpec.

    Raises:
        SchemaViolation: if the entry does not match the grammar
    """
    if isinstance(entry, DirSpec):
        return entry
    if not _is_sequence(entry):
        raise SchemaViolation(
            [Problem(path=path, message="expected a sequence [src target? files? delims? opts*]", value=entry)]
        )
    if not entry:
        raise SchemaViolation(
            [Problem(path=(*path, "src"), message="src is required and must be a string", value=None)]
        )

    # A bad src is reported alongside any problem in the remaining elements.
    problems: list[Problem] = []
    if not is_plain_string(entry[0]):
        problems.append(
            Problem(path=(*path, "src"), message="src is required and must be a string", value=entry[0])
        )

    fields: dict[str, Any] = {"src": entry[0]}
    index = 1
    if index < len(entry) and is_plain_string(entry[index]):
        fields["target"] = entry[index]
        index += 1

    rest = list(entry[index:])
    failures: list[str] = []
    for fixed in ALTERNATIVES:
        matched, failure = _match_alternative(fixed, rest, index)
        if matched is not None:
            if problems:
                raise SchemaViolation(problems)
            logger.debug(f"Matched {_alternative_name(fixed)} at {path}")
            fields.update(matched)
            if "delims" in fields:
                fields["delims"] = tuple(fields["delims"])
            if "files" in fields:
                fields["files"] = dict(fields["files"])
            return DirSpec(**fields)
        failures.append(f"{_alternative_name(fixed)} {failure}")

    problems.append(
        Problem(
            path=path,
            message="does not match [src target? files? delims? opts*]",
            value=entry,
            attempts=failures,
        )
    )
    raise SchemaViolation(problems)


class _ScalarFields(BaseModel):
    """Type checks for the non-positional top-level manifest keys."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    root: StrictStr = "root"
    description: StrictStr | None = None
    data_fn: StrictStr | None = None
    template_fn: StrictStr | None = None


_SCALAR_KEYS = {
    "root": "root",
    "description": "description",
    "data-fn": "data_fn",
    "template-fn": "template_fn",
}


def _conform_transform(value: Any) -> tuple[tuple[DirSpec, ...] | None, list[Problem]]:
    if not _is_sequence(value):
        return None, [
            Problem(path=("transform",), message="expected a sequence of entries", value=value)
        ]
    if not value:
        return None, [
            Problem(path=("transform",), message="must contain at least one entry", value=value)
        ]

    specs: list[DirSpec] = []
    problems: list[Problem] = []
    for index, entry in enumerate(value):
        try:
            specs.append(conform_dir_spec(entry, ("transform", index)))
        except SchemaViolation as exc:
            problems.extend(exc.problems)
    return tuple(specs), problems


def conform(data: Any) -> TemplateManifest:
    """Validate parsed manifest data and apply defaults.

    Unknown top-level keys are ignored.

    Args:
        data: Value loaded from the manifest file

    Returns:
        Normalized manifest

    Raises:
        SchemaViolation: listing every field that does not conform
    """
    if not isinstance(data, Mapping):
        raise SchemaViolation([Problem(message="expected a mapping", value=data)])

    problems: list[Problem] = []
    scalars = {
        field: data[key] for key, field in _SCALAR_KEYS.items() if key in data
    }
    fields: dict[str, Any] = {}
    try:
        fields.update(_ScalarFields(**scalars).model_dump(exclude_unset=True))
    except ValidationError as exc:
        reverse = {field: key for key, field in _SCALAR_KEYS.items()}
        for error in exc.errors():
            loc = tuple(reverse.get(str(part), part) for part in error["loc"])
            problems.append(
                Problem(path=loc, message=error["msg"], value=error.get("input"))
            )

    if "transform" in data:
        transform, transform_problems = _conform_transform(data["transform"])
        problems.extend(transform_problems)
        fields["transform"] = transform

    if problems:
        raise SchemaViolation(problems)
    return TemplateManifest(**fields)


def explain(data: Any) -> list[Problem]:
    """Return every schema problem in ``data`` (empty when it conforms)."""
    try:
        conform(data)
    except SchemaViolation as exc:
        return exc.problems
    return []
