from .type_registry import RegistrationState, ResolutionState, TypeRegistry

__all__ = ["RegistrationState", "ResolutionState", "TypeRegistry"]
