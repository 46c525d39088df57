"""
Type registry - one schema definition per named type.

Names move through two states:
- IN_PROGRESS: claimed by `begin()`, body still being mapped (cycle guard)
- DONE: body stored by `finish()`

Only the state transitions are locked; mapping a body runs outside the lock.
"""

import logging
import threading
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_REF_PREFIX
from ..errors import RegistryInvariantError
from ..schema.models import SchemaNode

logger = logging.getLogger(__name__)


class ResolutionState(str, Enum):
    IN_PROGRESS = "in_progress"
    DONE = "done"


class RegistrationState(str, Enum):
    """Outcome of `TypeRegistry.begin()`"""
    START = "start"
    ALREADY_BUILDING = "already_building"
    ALREADY_DONE = "already_done"


class TypeRegistry:
    """Registry of named schema definitions."""

    def __init__(self):
        """Initialize registry."""
        self._lock = threading.Lock()
        self._states: Dict[str, ResolutionState] = {}
        self._definitions: Dict[str, Optional[SchemaNode]] = {}

    def begin(self, name: str) -> RegistrationState:
        """
        Claim a name before mapping its body

        Returns:
            START if the caller must build the body, otherwise whether another
            caller is building it or has finished it
        """
        with self._lock:
            state = self._states.get(name)
            if state is None:
                self._states[name] = ResolutionState.IN_PROGRESS
                self._definitions[name] = None
                logger.debug(f"Building definition for {name}")
                return RegistrationState.START

        if state == ResolutionState.IN_PROGRESS:
            logger.debug(f"Cycle on {name}, emitting reference")
            return RegistrationState.ALREADY_BUILDING
        return RegistrationState.ALREADY_DONE

    def finish(self, name: str, definition: SchemaNode) -> None:
        """
        Store the body of a name claimed with `begin()`

        Raises:
            RegistryInvariantError: If the name was never begun or is already done
        """
        with self._lock:
            state = self._states.get(name)
            if state != ResolutionState.IN_PROGRESS:
                reason = "never begun" if state is None else "already finished"
                raise RegistryInvariantError(
                    f"Cannot finish definition for {name}: {reason}", type_name=name
                )
            self._states[name] = ResolutionState.DONE
            self._definitions[name] = definition
        logger.debug(f"Finished definition for {name}")

    def abandon(self, name: str) -> None:
        """
        Release a name whose body failed to build

        The name becomes unknown again, so a later resolution rebuilds it instead
        of referencing a definition that never arrives.
        """
        with self._lock:
            if self._states.get(name) != ResolutionState.IN_PROGRESS:
                return
            del self._states[name]
            del self._definitions[name]
        logger.debug(f"Abandoned definition for {name}")

    def definition_of(self, name: str) -> Optional[SchemaNode]:
        """Get the finished definition for a name, or None"""
        with self._lock:
            return self._definitions.get(name)

    def state_of(self, name: str) -> Optional[ResolutionState]:
        with self._lock:
            return self._states.get(name)

    def names(self) -> List[str]:
        """All registered names in first-begin order"""
        with self._lock:
            return list(self._states)

    def definitions(self) -> Dict[str, SchemaNode]:
        """Finished definitions in first-begin order"""
        with self._lock:
            return {
                name: definition
                for name, definition in self._definitions.items()
                if self._states[name] == ResolutionState.DONE
            }

    def to_dict(self, ref_prefix: str = DEFAULT_REF_PREFIX) -> Dict[str, Any]:
        """Render the definitions table (components/schemas)"""
        return {name: d.to_dict(ref_prefix) for name, d in self.definitions().items()}

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
