"""
Request payload normalization.

Mobile example apps post either form-encoded parameters or a JSON body.
parse_payload picks exactly one source per request and returns a plain dict.
"""
import re
from typing import Any, Dict

from rest_framework.exceptions import ParseError

_BRACKET_KEY = re.compile(r'^([^\[\]]+)((?:\[[^\[\]]*\])+)$')
_BRACKET_PART = re.compile(r'\[([^\[\]]*)\]')


def is_json_request(request) -> bool:
    return 'application/json' in (request.content_type or '')


def nest_form_params(params) -> Dict[str, Any]:
    """
    Flatten a QueryDict into a dict, expanding bracketed keys.

    ``metadata[order]=7`` becomes ``{'metadata': {'order': '7'}}``. A key
    ending in ``[]`` collects every value given for it into a list. For plain
    repeated keys the last value wins.
    """
    payload: Dict[str, Any] = {}

    for key in params.keys():
        match = _BRACKET_KEY.match(key)
        if not match:
            if isinstance(payload.get(key), (dict, list)):
                raise ParseError(f"Conflicting form parameter: {key}")
            payload[key] = params.get(key)
            continue

        parts = [match.group(1)] + _BRACKET_PART.findall(match.group(2))
        target = payload
        for part in parts[:-2]:
            target = target.setdefault(part, {})
            if not isinstance(target, dict):
                raise ParseError(f"Conflicting form parameter: {key}")

        parent, last = parts[-2], parts[-1]
        if last == '':
            if parent in target:
                raise ParseError(f"Conflicting form parameter: {key}")
            target[parent] = params.getlist(key)
        else:
            container = target.setdefault(parent, {})
            if not isinstance(container, dict):
                raise ParseError(f"Conflicting form parameter: {key}")
            container[last] = params.get(key)

    return payload


def parse_payload(request) -> Dict[str, Any]:
    """
    Normalize a DRF request into a single payload mapping.

    Form-style parameters (query string plus form body) are used whenever any
    are present. Only a JSON request without them has its body parsed as JSON.
    """
    if is_json_request(request):
        # Checked before touching request.data so the body is left unparsed
        if request.query_params:
            return nest_form_params(request.query_params)

        body = request.data
        if not isinstance(body, dict):
            raise ParseError("JSON body must be an object")
        return dict(body)

    params = request.query_params.copy()
    for key in request.POST.keys():
        params.setlist(key, request.POST.getlist(key))
    return nest_form_params(params)
