import copy

NAMESPACE = "default"
NAME = "sample-route"
BASE_URL = "http://test-routestore.example.com"
ROUTE_URL = "{}/httproute/{}/{}".format(BASE_URL, NAMESPACE, NAME)

USER_ID_RULE = {
    "matches": [{"headers": [{"name": "x-nexus-user-id", "value": "123"}]}],
    "backendRefs": [{"name": "blue", "port": 80}],
}

SAMPLE_ROUTE = {
    "apiVersion": "gateway.networking.k8s.io/v1",
    "kind": "HTTPRoute",
    "metadata": {
        "name": NAME,
        "namespace": NAMESPACE,
        "resourceVersion": "4711",
        "labels": {"app": "sample"},
    },
    "spec": {
        "parentRefs": [{"name": "public-gateway", "sectionName": "http"}],
        "hostnames": ["example.com"],
        "rules": [USER_ID_RULE],
    },
    "status": {"parents": []},
}


def route_document(rules=None, **spec):
    """A copy of the sample route, optionally with other rules or spec fields."""
    data = copy.deepcopy(SAMPLE_ROUTE)
    if rules is not None:
        data["spec"]["rules"] = copy.deepcopy(rules)
    data["spec"].update(spec)
    return data
