# app/construction_stages/services/validation.py
"""
Field rules for construction stage input.

Inputs are sparse mappings in the external (camelCase) shape. Only the fields
present in the input are checked; a key holding None or '' means "empty",
which is allowed for nullable fields only. Results are returned as
{field: [message, ...]} and the dict is empty when everything passes.
"""
import re

from ..exceptions import InvalidStatusError
from ..models import DURATION_UNITS, STATUSES
from .mapper import parse_iso_8601

HEX_COLOR_PATTERN = re.compile(r'^#[0-9a-fA-F]{6}$')

RULES = {
    'name': {
        'required': True,
        'max_length': 255,
    },
    'startDate': {
        'required': True,
        'iso_8601': True,
    },
    'endDate': {
        'nullable': True,
        'iso_8601': True,
        'later_than': 'startDate',
    },
    'duration': {
        'skip': True,
    },
    'durationUnit': {
        'allowed_values': DURATION_UNITS,
        'default': 'DAYS',
    },
    'color': {
        'nullable': True,
        'hex_color': True,
    },
    'externalId': {
        'nullable': True,
        'max_length': 255,
    },
    'status': {
        'allowed_values': STATUSES,
        'default': 'NEW',
    },
}

MESSAGES = {
    'required': "Field '{field}' is required.",
    'empty': "Field '{field}' cannot be empty.",
    'not_string': "Field '{field}' must be a string.",
    'max_length': "Field '{field}' must be at most {param} characters long.",
    'iso_8601': "Field '{field}' must be a valid ISO 8601 date and time (YYYY-MM-DDThh:mm:ssZ).",
    'later_than': "Field '{field}' must be a datetime later than the '{param}' field.",
    'allowed_values': "Field '{field}' must be one of the allowed values: {param}.",
    'hex_color': "Field '{field}' must be a valid HEX color code.",
}


def is_empty(value):
    return value is None or value == ''


def _check_rule(rule, param, field, value, data):
    """Returns the message for a broken rule, or None."""
    if rule == 'max_length':
        if not isinstance(value, str):
            return MESSAGES['not_string'].format(field=field)
        if len(value) > param:
            return MESSAGES['max_length'].format(field=field, param=param)

    elif rule == 'iso_8601':
        if parse_iso_8601(value) is None:
            return MESSAGES['iso_8601'].format(field=field)

    elif rule == 'later_than':
        other = data.get(param)
        if is_empty(other):
            return None
        start = parse_iso_8601(other)
        end = parse_iso_8601(value)
        # Unparseable dates are reported by the iso_8601 rule
        if start is not None and end is not None and end <= start:
            return MESSAGES['later_than'].format(field=field, param=param)

    elif rule == 'allowed_values':
        if value not in param:
            return MESSAGES['allowed_values'].format(field=field, param=', '.join(param))

    elif rule == 'hex_color':
        if not isinstance(value, str) or not HEX_COLOR_PATTERN.match(value):
            return MESSAGES['hex_color'].format(field=field)

    return None


def validate_fields(data, creating=False):
    """
    Checks the input against RULES.

    With creating=True, fields marked 'required' must be present as well.
    Calling it twice with the same input gives the same result.
    """
    errors = {}
    for field, field_rules in RULES.items():
        if field_rules.get('skip'):
            continue

        if field not in data:
            if creating and field_rules.get('required'):
                errors[field] = [MESSAGES['required'].format(field=field)]
            continue

        value = data[field]
        if is_empty(value):
            if not field_rules.get('nullable'):
                errors[field] = [MESSAGES['empty'].format(field=field)]
            continue

        messages = []
        for rule, param in field_rules.items():
            message = _check_rule(rule, param, field, value, data)
            if message:
                messages.append(message)
        if messages:
            errors[field] = messages

    return errors


def apply_defaults(data):
    """Returns a copy of the input with defaults filled in for absent fields."""
    result = dict(data)
    for field, field_rules in RULES.items():
        if 'default' in field_rules and field not in result:
            result[field] = field_rules['default']
    return result


def ensure_valid_status(value):
    if value not in STATUSES:
        raise InvalidStatusError(value)
