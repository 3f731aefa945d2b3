"""
The **routing** package keeps the blue/green routing intent of one HTTPRoute:
header rules, the default pool, and the read-modify-write cycle that pushes
them to the route store.
"""
from django.conf import settings

from routing.client import RouteClient, static_credentials
from routing.codec import RouteCodec
from routing.headers import HeaderTranslator, load_header_mappings
from routing.sync import Synchronizer


def get_codec():
    return RouteCodec(
        HeaderTranslator(load_header_mappings()),
        port=settings.ROUTING_BACKEND_PORT,
        policy=settings.ROUTING_DEFAULT_POOL_POLICY,
        pools=settings.ROUTING_POOLS,
    )


def get_synchronizer(token=None, user=None, credentials=None):
    """
    Build a synchronizer for the configured route store.

    ``credentials`` is a callable returning the bearer token to attach; a
    plain ``token`` is wrapped into one.
    """
    if credentials is None and token is not None:
        credentials = static_credentials(token)
    client = RouteClient(
        settings.ROUTING_API_URL,
        credentials=credentials,
        timeout=settings.ROUTING_TIMEOUT,
    )
    return Synchronizer(
        client,
        get_codec(),
        user=user or settings.ROUTING_CALLER_IDENTITY,
        method=settings.ROUTING_WRITE_METHOD,
        fallback_pool=settings.ROUTING_POOLS[0],
    )
