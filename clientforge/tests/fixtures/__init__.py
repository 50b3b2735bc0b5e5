"""Test fixtures for clientforge tests.

This module provides sample OpenAPI documents and utilities for testing
the code generation functionality.
"""

import copy
import json

import yaml

# Minimal OpenAPI 3.0 document for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# One operation without success responses
SIMPLE_API_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Simple API', 'version': '1.0.0'},
    'paths': {
        '/foo/bar': {
            'get': {
                'summary': 'Get the bar of foo',
                'responses': {'404': {'description': 'Not found'}},
            }
        }
    },
}

# Petstore-like document with models and several operations
PETSTORE_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Petstore API', 'version': '1.0.0'},
    'paths': {
        '/pet': {
            'put': {
                'summary': 'Update an existing pet',
                'requestBody': {
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/Pet'}
                        }
                    }
                },
                'responses': {
                    '200': {
                        'description': 'Successful operation',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            },
                            'application/xml': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            },
                        },
                    },
                    '400': {'description': 'Invalid ID supplied'},
                    '404': {'description': 'Pet not found'},
                    '405': {'description': 'Validation exception'},
                },
            },
            'post': {
                'summary': 'Add a new pet to the store',
                'responses': {
                    '200': {
                        'description': 'Successful operation',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    '405': {'description': 'Invalid input'},
                },
            },
        },
        '/pet/findByStatus': {
            'get': {
                'summary': 'Finds Pets by status',
                'parameters': [
                    {
                        'name': 'status',
                        'in': 'query',
                        'required': False,
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'successful operation',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {'$ref': '#/components/schemas/Pet'},
                                }
                            }
                        },
                    },
                    '400': {'description': 'Invalid status value'},
                },
            }
        },
        '/pet/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'integer', 'format': 'int64'},
                }
            ],
            'get': {
                'summary': 'Find pet by ID',
                'responses': {
                    '200': {
                        'description': 'successful operation',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    '400': {'description': 'Invalid ID supplied'},
                    '404': {'description': 'Pet not found'},
                },
            },
            'delete': {
                'summary': 'Deletes a pet',
                'parameters': [
                    {
                        'name': 'api_key',
                        'in': 'header',
                        'required': False,
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {'400': {'description': 'Invalid pet value'}},
            },
        },
    },
    'components': {
        'schemas': {
            'Category': {
                'type': 'object',
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                },
            },
            'Tag': {
                'type': 'object',
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                },
            },
            'Pet': {
                'type': 'object',
                'required': ['name', 'photoUrls'],
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                    'category': {'$ref': '#/components/schemas/Category'},
                    'photoUrls': {'type': 'array', 'items': {'type': 'string'}},
                    'tags': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/Tag'},
                    },
                },
            },
        }
    },
}

# Self-referencing and mutually recursive schemas
CYCLIC_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Cyclic API', 'version': '1.0.0'},
    'paths': {
        '/tree': {
            'get': {
                'responses': {
                    '200': {
                        'description': 'OK',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Node'}
                            }
                        },
                    }
                }
            }
        }
    },
    'components': {
        'schemas': {
            'Node': {
                'type': 'object',
                'required': ['value'],
                'properties': {
                    'value': {'type': 'integer', 'format': 'int32'},
                    'children': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/Node'},
                    },
                    'owner': {'$ref': '#/components/schemas/Owner'},
                },
            },
            'Owner': {
                'type': 'object',
                'properties': {
                    'name': {'type': 'string'},
                    'root': {'$ref': '#/components/schemas/Node'},
                },
            },
        }
    },
}

# Primitive kinds, aliases and arrays
TYPES_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Types API', 'version': '1.0.0'},
    'paths': {},
    'components': {
        'schemas': {
            'Sample': {
                'type': 'object',
                'properties': {
                    'int32': {'type': 'integer', 'format': 'int32'},
                    'int64': {'type': 'integer', 'format': 'int64'},
                    'plainInteger': {'type': 'integer'},
                    'float': {'type': 'number', 'format': 'float'},
                    'double': {'type': 'number', 'format': 'double'},
                    'plainNumber': {'type': 'number'},
                    'flag': {'type': 'boolean'},
                    'text': {'type': 'string', 'format': 'date-time'},
                    'matrix': {
                        'type': 'array',
                        'items': {'type': 'array', 'items': {'type': 'number'}},
                    },
                    'identifier': {'$ref': '#/components/schemas/Identifier'},
                    'alias': {'$ref': '#/components/schemas/SampleAlias'},
                },
            },
            'Identifier': {'type': 'string'},
            'SampleAlias': {'$ref': '#/components/schemas/Identifier'},
        }
    },
}

# Parameters declared on the path item, overridden, referenced and by content
PARAMETERS_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Parameters API', 'version': '1.0.0'},
    'paths': {
        '/items/{itemId}': {
            'parameters': [
                {
                    'name': 'itemId',
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'string'},
                },
                {'name': 'verbose', 'in': 'query', 'schema': {'type': 'boolean'}},
            ],
            'get': {
                'parameters': [
                    {
                        'name': 'verbose',
                        'in': 'query',
                        'schema': {'type': 'integer', 'format': 'int32'},
                    },
                    {'$ref': '#/components/parameters/Limit'},
                    {'name': 'item-id', 'in': 'header', 'schema': {'type': 'string'}},
                    {'name': 'item_id', 'in': 'cookie', 'schema': {'type': 'string'}},
                    {
                        'name': 'filter',
                        'in': 'query',
                        'content': {
                            'application/json': {'schema': {'type': 'string'}},
                            'text/plain': {'schema': {'type': 'string'}},
                        },
                    },
                    {'name': 'class', 'in': 'query', 'schema': {'type': 'string'}},
                ],
                'responses': {'204': {'description': 'No content'}},
            },
        }
    },
    'components': {
        'parameters': {
            'Limit': {
                'name': 'limit',
                'in': 'query',
                'required': True,
                'schema': {'type': 'integer', 'format': 'int64'},
            }
        }
    },
}

# Several success responses, a referenced response and a problem document
RESPONSES_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Responses API', 'version': '1.0.0'},
    'paths': {
        '/jobs': {
            'post': {
                'responses': {
                    '200': {
                        'description': 'Done',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Job'}
                            }
                        },
                    },
                    '202': {'description': 'Accepted'},
                    '301': {'description': 'Moved'},
                    '503': {'$ref': '#/components/responses/Unavailable'},
                }
            }
        }
    },
    'components': {
        'schemas': {
            'Job': {
                'type': 'object',
                'properties': {'id': {'type': 'string'}},
            },
            'Problem': {
                'type': 'object',
                'properties': {'title': {'type': 'string'}},
            },
        },
        'responses': {
            'Unavailable': {
                'description': 'Service unavailable',
                'content': {
                    'application/problem+json': {
                        'schema': {'$ref': '#/components/schemas/Problem'}
                    },
                    'text/*': {'schema': {'type': 'string'}},
                },
            }
        },
    },
}


def make_spec(paths: dict | None = None, schemas: dict | None = None) -> dict:
    """Build a minimal document around the given paths and component schemas."""
    spec = copy.deepcopy(MINIMAL_OPENAPI_SPEC)
    spec['paths'] = copy.deepcopy(paths or {})
    if schemas is not None:
        spec['components'] = {'schemas': copy.deepcopy(schemas)}
    return spec


def get_spec_as_json(spec: dict) -> str:
    """Convert a document dict to a JSON string."""
    return json.dumps(spec, indent=2)


def get_spec_as_yaml(spec: dict) -> str:
    """Convert a document dict to a YAML string."""
    return yaml.safe_dump(spec, sort_keys=False)
