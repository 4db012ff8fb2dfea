"""
REST resource wrappers of the studio backend.

Each function takes a `RequestGateway` as its first argument and performs
exactly one logical backend operation through it. Errors surface as
`ApiRequestError`; presentation is left to the caller.
"""
