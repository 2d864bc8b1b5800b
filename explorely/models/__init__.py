"""
API schemas.

Pydantic request/response contracts. JSON uses camelCase keys; Python code
uses the snake_case field names.
"""
