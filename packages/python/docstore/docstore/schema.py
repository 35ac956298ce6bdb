"""Schema definition and document validation.

Validation never raises for bad input: it returns a ``ValidationResult`` whose
``errors`` list every violated constraint across all fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from loguru import logger

from .errors import Constraint, ValidationIssue
from .fields import ALWAYS, FieldKind, FieldRule


@dataclass(frozen=True)
class ValidationResult:
    document: Optional[dict[str, Any]]
    errors: tuple[ValidationIssue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_absent(document: Mapping[str, Any], name: str) -> bool:
    return document.get(name) is None


def _check_value(rule: FieldRule, value: Any) -> tuple[Any, list[ValidationIssue]]:
    """Type-check, normalize and bound-check one present value."""

    name = rule.name
    if not rule.kind.accepts(value):
        return value, [
            ValidationIssue(
                name,
                Constraint.TYPE,
                f"expected {rule.kind.value}, got {type(value).__name__}",
            )
        ]

    value = rule.normalize(value)
    issues: list[ValidationIssue] = []

    if rule.kind is FieldKind.STRING:
        if rule.min_length is not None and len(value) < rule.min_length:
            issues.append(
                ValidationIssue(
                    name, Constraint.MIN_LENGTH, f"length {len(value)} is shorter than {rule.min_length}"
                )
            )
        if rule.max_length is not None and len(value) > rule.max_length:
            issues.append(
                ValidationIssue(
                    name, Constraint.MAX_LENGTH, f"length {len(value)} is longer than {rule.max_length}"
                )
            )
    elif rule.kind is FieldKind.NUMBER:
        if rule.min is not None and value < rule.min:
            issues.append(ValidationIssue(name, Constraint.MIN, f"{value} is less than {rule.min}"))
        if rule.max is not None and value > rule.max:
            issues.append(ValidationIssue(name, Constraint.MAX, f"{value} is greater than {rule.max}"))
    elif rule.kind is FieldKind.ARRAY_OF_STRING:
        if rule.min_items is not None and len(value) < rule.min_items:
            issues.append(
                ValidationIssue(
                    name, Constraint.MIN_ITEMS, f"needs at least {rule.min_items} item(s), got {len(value)}"
                )
            )
        if rule.max_items is not None and len(value) > rule.max_items:
            issues.append(
                ValidationIssue(
                    name, Constraint.MAX_ITEMS, f"allows at most {rule.max_items} item(s), got {len(value)}"
                )
            )

    if rule.allowed_values is not None:
        candidates = value if rule.kind is FieldKind.ARRAY_OF_STRING else [value]
        rejected = [item for item in candidates if item not in rule.allowed_values]
        if rejected:
            allowed = ", ".join(sorted(repr(v) for v in rule.allowed_values))
            issues.append(
                ValidationIssue(
                    name,
                    Constraint.ENUM,
                    f"{', '.join(repr(v) for v in rejected)} not in allowed values ({allowed})",
                )
            )
    return value, issues


def _required_issue(rule: FieldRule, document: Mapping[str, Any]) -> Optional[ValidationIssue]:
    """Evaluate ``rule.required``; a failing predicate is reported, not raised."""

    try:
        applies = rule.required.applies(document)
    except Exception as exc:
        logger.warning(
            "Required condition {condition!r} for {field} raised: {error}",
            condition=rule.required,
            field=rule.name,
            error=exc,
        )
        return ValidationIssue(
            rule.name, Constraint.REQUIRED, f"required condition could not be evaluated: {exc}"
        )
    if applies:
        return ValidationIssue(rule.name, Constraint.REQUIRED, "required field missing")
    return None


class Schema:
    """Ordered, immutable set of field rules."""

    def __init__(self, rules: Iterable[FieldRule], *, name: str = "document") -> None:
        ordered: dict[str, FieldRule] = {}
        for rule in rules:
            if rule.name in ordered:
                raise ValueError(f"duplicate field {rule.name!r} in schema {name!r}")
            ordered[rule.name] = rule
        self.name = name
        self._rules = MappingProxyType(ordered)

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, fields={list(self._rules)})"

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def _unknown_fields(
        self, candidate: Mapping[str, Any], strict: bool
    ) -> list[ValidationIssue]:
        if not strict:
            return []
        return [
            ValidationIssue(str(key), Constraint.UNKNOWN_FIELD, "field is not declared in the schema")
            for key in candidate
            if key not in self._rules
        ]

    def validate(self, candidate: Mapping[str, Any], *, strict: bool = True) -> ValidationResult:
        """Validate a complete document, filling defaults in schema order."""

        if not isinstance(candidate, Mapping):
            raise TypeError(f"candidate must be a mapping, got {type(candidate).__name__}")

        # Declared fields as supplied, then overwritten in order with defaults
        # and normalized values so default factories see the document so far.
        document: dict[str, Any] = {
            key: value for key, value in candidate.items() if key in self._rules
        }
        issues: list[ValidationIssue] = []

        for rule in self:
            if _is_absent(document, rule.name) and rule.has_default:
                document[rule.name] = rule.default_for(MappingProxyType(dict(document)))

            if _is_absent(document, rule.name):
                document.pop(rule.name, None)
                issue = _required_issue(rule, document)
                if issue is not None:
                    issues.append(issue)
                continue

            value, field_issues = _check_value(rule, document[rule.name])
            document[rule.name] = value
            issues.extend(field_issues)

        issues.extend(self._unknown_fields(candidate, strict))
        if issues:
            return ValidationResult(None, tuple(issues))
        return ValidationResult({rule.name: document[rule.name] for rule in self if rule.name in document})

    def validate_partial(self, patch: Mapping[str, Any], *, strict: bool = True) -> ValidationResult:
        """Validate only the supplied fields of an update.

        No defaults are applied and absent fields are not reported. Setting an
        always-required field to ``None`` is reported as missing.
        """

        if not isinstance(patch, Mapping):
            raise TypeError(f"patch must be a mapping, got {type(patch).__name__}")

        document: dict[str, Any] = {}
        issues: list[ValidationIssue] = []
        for rule in self:
            if rule.name not in patch:
                continue
            value = patch[rule.name]
            if value is None:
                if rule.required is ALWAYS:
                    issues.append(
                        ValidationIssue(rule.name, Constraint.REQUIRED, "required field missing")
                    )
                else:
                    document[rule.name] = None
                continue
            value, field_issues = _check_value(rule, value)
            document[rule.name] = value
            issues.extend(field_issues)

        issues.extend(self._unknown_fields(patch, strict))
        if issues:
            return ValidationResult(None, tuple(issues))
        return ValidationResult(document)
