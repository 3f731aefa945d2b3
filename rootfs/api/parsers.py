from rest_framework.parsers import JSONParser


class MergePatchParser(JSONParser):
    """
    Parses JSON merge patch documents (RFC 7386) sent with PATCH.
    """
    media_type = 'application/merge-patch+json'
