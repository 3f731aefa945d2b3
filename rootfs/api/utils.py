"""
Helper functions used by the route store.
"""
import logging
import jsonschema
from django.http import HttpResponse
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)


def split_path(path):
    """Split a URL path into its non-empty segments."""
    return [part for part in path.split('/') if part]


def get_bearer_token(request):
    """Return the bearer token the caller sent, or None."""
    auth = request.META.get('HTTP_AUTHORIZATION', '')
    if len(auth) > 7 and auth.startswith('Bearer '):
        return auth[7:]
    return None


def text_error(message, status):
    return HttpResponse(message, status=status, content_type='text/plain; charset=utf-8')


def validate_json(value, schema, raise_exception=ValidationError):
    if value is not None:
        try:
            jsonschema.validate(value, schema)
        except jsonschema.ValidationError as e:
            raise raise_exception("could not validate {}: {}".format(value, e.message))
    return value
