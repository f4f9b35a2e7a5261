"""API helpers: orjson-backed responses and the envelope builders."""
