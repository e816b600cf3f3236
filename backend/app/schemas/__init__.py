"""
Pydantic request/response schemas, one module per resource.

Request payload fields are Optional; presence and emptiness are
business rules checked by the services (→ 400 ValidationError), while
FastAPI's own 422 is reserved for malformed JSON and wrong types.
"""
