"""
Pydantic request/response models, one module per resource. They are kept
apart from the ORM models so the API never exposes internal columns such as
`password_hash` or the binary `content`.
"""
