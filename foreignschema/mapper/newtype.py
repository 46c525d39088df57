"""Newtype unwrapper: single-field tuple structs are transparent aliases."""
import logging

logger = logging.getLogger(__name__)


def unwrap_newtype(name: str, inner_shape, mapper):
    """
    Map a newtype as its inner shape

    The newtype gets no registry entry and no enclosing object. If the inner
    shape is a named type, the result is a reference to that type.
    """
    logger.debug(f"Newtype {name} unwrapped to its inner shape")
    return mapper.map(inner_shape)
