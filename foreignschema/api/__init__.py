from .foreign import Foreign, ForeignOpt, encode_value, resolve_optional, resolve_required

__all__ = [
    "Foreign",
    "ForeignOpt",
    "encode_value",
    "resolve_optional",
    "resolve_required",
]
