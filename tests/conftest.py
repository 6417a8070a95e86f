"""
Общие фикстуры: небольшая Swagger 2.0 схема зоомагазина
"""

import copy

import pytest

from swagger_interface.internal.parser.swagger import SwaggerParser

PETSTORE_SPEC = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "definitions": {
        "Category": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
            },
        },
        "Pet": {
            "type": "object",
            "required": ["name", "photoUrls"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "category": {"$ref": "#/definitions/Category"},
                "name": {"type": "string"},
                "photoUrls": {"type": "array", "items": {"type": "string"}},
                "status": {"type": "string", "enum": ["available", "pending", "sold"]},
                "size": {"$ref": "#/definitions/PetSize"},
            },
        },
        "PetSize": {
            "type": "integer",
            "enum": [1, 2, 3],
            "x-enumNames": ["Small", "Medium", "Large"],
        },
        "2fa": {
            "type": "object",
            "properties": {"code": {"type": "string"}},
        },
    },
    "paths": {
        "/pets/{petId}": {
            "get": {
                "operationId": "getPetById",
                "summary": "Find pet by ID",
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "type": "integer"}
                ],
                "responses": {
                    "200": {"description": "OK", "schema": {"$ref": "#/definitions/Pet"}}
                },
            },
            "delete": {
                "operationId": "deletePet",
                "parameters": [
                    {
                        "name": "petId",
                        "in": "path",
                        "required": True,
                        "type": "integer",
                        "format": "int64",
                    },
                    {"name": "api_key", "in": "header", "type": "string"},
                ],
                "responses": {"200": {"description": "Deleted"}},
            },
        },
        "/pets": {
            "get": {
                "operationId": "findPets",
                "parameters": [
                    {
                        "name": "status",
                        "in": "query",
                        "type": "array",
                        "items": {"type": "string"},
                    },
                    {"name": "page.size", "in": "query", "type": "integer"},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {
                            "type": "array",
                            "items": {"$ref": "#/definitions/Pet"},
                        },
                    }
                },
            },
            "post": {
                "operationId": "addPet",
                "parameters": [
                    {
                        "name": "body",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/Pet"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {"$ref": "#/definitions/Missing"},
                    }
                },
            },
        },
        "/pets/kind/{kind}": {
            "get": {
                "operationId": "findPetsByKind",
                "parameters": [
                    {
                        "name": "kind",
                        "in": "path",
                        "required": True,
                        "type": "string",
                        "enum": ["dog", "cat"],
                    }
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {
                            "type": "array",
                            "items": {"$ref": "#/definitions/Pet"},
                        },
                    }
                },
            },
        },
        "/security/2fa": {
            "get": {
                "operationId": "getTwoFactor",
                "responses": {
                    "200": {"description": "OK", "schema": {"$ref": "#/definitions/2fa"}}
                },
            }
        },
    },
}


@pytest.fixture
def petstore_spec():
    return copy.deepcopy(PETSTORE_SPEC)


@pytest.fixture
def petstore_document(petstore_spec):
    return SwaggerParser(petstore_spec).parse()
