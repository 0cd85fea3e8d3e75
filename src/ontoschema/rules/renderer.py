"""Lower validation records into rendered rules."""

import math

from ..models import BaseCategory, Interval, ValidationRecord
from .models import Directive, DirectiveName, RenderedRule, RuleKind

RULE_KINDS: dict[BaseCategory, RuleKind] = {
    BaseCategory.ANY: RuleKind.ANY,
    BaseCategory.BOOLEAN: RuleKind.BOOLEAN,
    BaseCategory.TEXT: RuleKind.STRING,
    BaseCategory.NUMERIC: RuleKind.NUMBER,
    BaseCategory.LIST: RuleKind.ARRAY,
    BaseCategory.STRUCT: RuleKind.STRUCT,
    BaseCategory.OBJECT: RuleKind.OBJECT,
}

# (exact, lower, upper) directive names per interval field
_INTERVAL_DIRECTIVES: dict[str, tuple[DirectiveName, DirectiveName, DirectiveName]] = {
    "length": (DirectiveName.EXACT_LENGTH, DirectiveName.MIN_LENGTH, DirectiveName.MAX_LENGTH),
    "range": (DirectiveName.EXACT, DirectiveName.MIN, DirectiveName.MAX),
    "size": (DirectiveName.EXACT_SIZE, DirectiveName.MIN_SIZE, DirectiveName.MAX_SIZE),
}

_STRICT_DIRECTIVES: tuple[DirectiveName, DirectiveName] = (DirectiveName.GREATER, DirectiveName.LESS)

_FLAG_DIRECTIVES: tuple[tuple[str, DirectiveName], ...] = (
    ("is_url", DirectiveName.URI),
    ("is_hex", DirectiveName.HEX),
    ("is_email", DirectiveName.EMAIL),
    ("is_int", DirectiveName.INTEGER),
    ("is_stamp", DirectiveName.TIMESTAMP),
    ("is_set", DirectiveName.UNIQUE),
)

REFERENCE_FIELDS: tuple[str, ...] = ("collection", "instance", "terms", "fields")


def interval_directives(interval: Interval, names: tuple[DirectiveName, DirectiveName, DirectiveName],
                        exclusive_adjust: bool = True,
                        strict_names: tuple[DirectiveName, DirectiveName] | None = None) -> list[Directive]:
    """Turn an interval into bound directives.

    A single-point interval becomes one exact directive; infinite bounds
    produce no directive. An exclusive bound becomes a strict directive when
    `strict_names` is given, otherwise it is shifted by one into an inclusive
    bound (unless `exclusive_adjust` is off). Shifting is only sound for
    integer quantities such as lengths, sizes and integer ranges.
    """
    exact_name, lower_name, upper_name = names
    lower, upper, lower_inclusive, upper_inclusive = interval

    if lower == upper:
        return [Directive(exact_name, lower)]

    directives = []
    if not math.isinf(lower):
        if lower_inclusive:
            directives.append(Directive(lower_name, lower))
        elif strict_names is not None:
            directives.append(Directive(strict_names[0], lower))
        else:
            directives.append(Directive(lower_name, lower + 1 if exclusive_adjust else lower))
    if not math.isinf(upper):
        if upper_inclusive:
            directives.append(Directive(upper_name, upper))
        elif strict_names is not None:
            directives.append(Directive(strict_names[1], upper))
        else:
            directives.append(Directive(upper_name, upper - 1 if exclusive_adjust else upper))
    return directives


def render_record(record: ValidationRecord, exclusive_adjust: bool = True) -> RenderedRule:
    """Render a validation record and its nested records.

    Args:
        record: Compiled validation record
        exclusive_adjust: Shift exclusive length, size and integer range bounds
                          by one so that their directives are inclusive

    Returns:
        RenderedRule tree mirroring the record
    """
    category = record.category or BaseCategory.ANY
    rule = RenderedRule(kind=RULE_KINDS[category])

    for field_name, names in _INTERVAL_DIRECTIVES.items():
        interval = getattr(record, field_name)
        if interval is None:
            continue
        # Numeric ranges are continuous unless the value is an integer
        strict_names = _STRICT_DIRECTIVES if field_name == "range" and not record.is_int else None
        rule.directives.extend(interval_directives(interval, names, exclusive_adjust, strict_names))

    if record.decimals is not None:
        rule.directives.append(Directive(DirectiveName.PRECISION, record.decimals))

    for pattern in record.regex:
        rule.directives.append(Directive(DirectiveName.MATCHES, pattern))

    for flag, name in _FLAG_DIRECTIVES:
        if getattr(record, flag):
            rule.directives.append(Directive(name))

    if record.is_ref:
        for field_name in REFERENCE_FIELDS:
            value = getattr(record, field_name)
            if value is not None:
                rule.references[field_name] = list(value) if isinstance(value, list) else value

    rule.cast = list(record.cast)
    rule.custom = list(record.custom)

    if record.child is not None:
        rule.items = render_record(record.child, exclusive_adjust)
    if record.key_record is not None:
        rule.keys = render_record(record.key_record, exclusive_adjust)
    if record.value_record is not None:
        rule.values = render_record(record.value_record, exclusive_adjust)

    return rule
