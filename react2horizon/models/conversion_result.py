"""Conversion result data model."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass(frozen=True)
class ComponentInfo:
    """Metadata extracted for one recognised React component.

    Created once per component definition and never mutated afterwards.

    Attributes:
        name: Component name
        props: Prop names in declaration order (duplicates dropped)
        state: State entries formatted as "name (inferredType)"
        effects: Human-readable effect summaries
        is_class: True for class components, False for functional ones
    """
    name: str
    props: List[str] = field(default_factory=list)
    state: List[str] = field(default_factory=list)
    effects: List[str] = field(default_factory=list)
    is_class: bool = False


@dataclass
class ConversionResult:
    """Result of React to Horizon UI conversion.

    Contains the converted source along with the diagnostics collected
    while converting it.

    ``success`` is True exactly when ``errors`` is empty. ``code`` is only
    empty on the failure path; a successful conversion always carries its
    best-effort output even if warnings were raised.

    Attributes:
        success: Whether the conversion completed without errors
        code: Converted Horizon UI source text
        errors: Ordered error messages
        warnings: Ordered warnings about lossy or manual-follow-up conversions
        components: One ComponentInfo per recognised component
    """
    success: bool
    code: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    components: List[ComponentInfo] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Render the result as a JSON-serialisable dictionary.

        Component keys use camelCase (``isClass``) to match the report
        format consumed by the host application.
        """
        components = []
        for component in self.components:
            data = asdict(component)
            data['isClass'] = data.pop('is_class')
            components.append(data)
        return {
            'success': self.success,
            'code': self.code,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
            'components': components,
        }
