"""Data models used while converting a single source text.

These are transient: they live for one ``convert`` call and are discarded
with it. Only ComponentInfo (see react2horizon.models) survives in the
returned ConversionResult.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from react2horizon.config.models import ConverterConfig
from react2horizon.models.conversion_result import ComponentInfo

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """Lifecycle of a ReactToHorizonConverter.convert call.

    IDLE -> RUNNING -> COMPLETED | FAILED
    """
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ConversionContext:
    """Call-scoped accumulators threaded through every collaborator.

    A fresh context is created for each conversion, so no mutable state is
    shared between calls.

    Attributes:
        config: Converter options for this call
        errors: Ordered error messages
        warnings: Ordered warnings
        components: ComponentInfo records in discovery order
    """
    config: ConverterConfig = field(default_factory=ConverterConfig)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    components: List[ComponentInfo] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.debug(f"Warning: {message}")
        self.warnings.append(message)


@dataclass
class StateVariable:
    """A useState declaration found in a component body.

    Attributes:
        name: State variable name (e.g. "count")
        setter: Setter function name (e.g. "setCount")
        inferred_type: Type inferred from the initializer (e.g. "number")
        initial_value: Initializer literal as written ("null" when absent)
    """
    name: str
    setter: str
    inferred_type: str
    initial_value: str

    def describe(self) -> str:
        return f"{self.name} ({self.inferred_type})"


@dataclass
class EffectBlock:
    """A useEffect declaration found in a component body.

    Attributes:
        body: Effect callback body, stripped
        dependencies: Dependency list text verbatim, or None when the call
                      had no dependency array
    """
    body: str
    dependencies: Optional[str]

    @property
    def dependency_label(self) -> str:
        if self.dependencies is None:
            return "every render"
        return self.dependencies.strip() or "no deps"


@dataclass
class HookExtraction:
    """Output of the hook/state extractor for one component body.

    Attributes:
        fields: Class field declarations, one per line (unindented)
        accessor_methods: Accessor method texts, one per setter
        body: Component body with state and effect declarations removed
        state_variables: State variables in declaration order
        effects: Effect blocks in declaration order
        lifecycle_blocks: Commented-out effect text for the start() method
    """
    fields: List[str] = field(default_factory=list)
    accessor_methods: List[str] = field(default_factory=list)
    body: str = ""
    state_variables: List[StateVariable] = field(default_factory=list)
    effects: List[EffectBlock] = field(default_factory=list)
    lifecycle_blocks: List[str] = field(default_factory=list)

    @property
    def state_names(self) -> List[str]:
        return [state.name for state in self.state_variables]
