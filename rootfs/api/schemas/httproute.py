BACKEND_REFS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "port": {"type": "integer", "minimum": 1, "maximum": 65535},
            "weight": {"type": "integer", "minimum": 0},
        },
        "required": ["name"],
    },
}

MATCHES_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "headers": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "value": {"type": "string"},
                    },
                    "required": ["name", "value"],
                },
            },
        },
    },
}

SPEC_SCHEMA = {
    "type": "object",
    "properties": {
        "parentRefs": {"type": "array", "items": {"type": "object"}},
        "hostnames": {"type": "array", "items": {"type": "string"}},
        "rules": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "matches": MATCHES_SCHEMA,
                    "backendRefs": BACKEND_REFS_SCHEMA,
                },
            },
        },
    },
}

SCHEMA = {
    "$schema": "http://json-schema.org/schema#",
    "type": "object",
    "properties": {
        "apiVersion": {"type": "string"},
        "kind": {"type": "string", "enum": ["HTTPRoute"]},
        "metadata": {"type": "object"},
        "spec": SPEC_SCHEMA,
    },
    "required": ["spec"],
}

PATCH_SCHEMA = {
    "$schema": "http://json-schema.org/schema#",
    "type": "object",
    "properties": {
        "metadata": {"type": ["object", "null"]},
        "spec": {"oneOf": [SPEC_SCHEMA, {"type": "null"}]},
    },
}
