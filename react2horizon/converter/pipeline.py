"""Conversion pipeline facade.

ReactToHorizonConverter is the single entry point for converting React
source into Horizon UI source. It strips source-framework imports, prepends
the Horizon import preamble and runs the component converter, catching any
exception once and reporting it as a single error.
"""

import logging
import re
from typing import Optional

from react2horizon.config.models import ConverterConfig
from react2horizon.models.conversion_result import ConversionResult

from .component_converter import ComponentConverter
from .errors import ConversionFailure
from .mappings import HORIZON_IMPORTS
from .models import ConversionContext, PipelineState

logger = logging.getLogger(__name__)

IMPORT_RE = re.compile(
    r'^[ \t]*import\s+(?:[^;\'"]*?\s+from\s+)?([\'"])(?P<module>[^\'"]+)\1[ \t]*;?[ \t]*\n?',
    re.M,
)

PREAMBLE_HEADER = (
    "// Meta Horizon Worlds UIComponent\n"
    "// Generated from React component - manual verification required"
)


def is_stripped_module(module: str) -> bool:
    """True for imports of React itself or of local/aliased modules.

    Example:
        >>> is_stripped_module("react")
        True
        >>> is_stripped_module("./Button")
        True
        >>> is_stripped_module("lodash")
        False
    """
    return (
        module in ('react', 'react-dom')
        or module.startswith('react/')
        or module.startswith('@/')
        or module.startswith('.')
        or '/' in module
    )


def strip_imports(source: str) -> str:
    """Remove React, aliased and relative import statements from ``source``."""
    return IMPORT_RE.sub(
        lambda m: '' if is_stripped_module(m.group('module')) else m.group(0),
        source,
    )


class ReactToHorizonConverter:
    """Converts React component source text into Horizon UI source text.

    Each call to convert() uses its own ConversionContext, so an instance
    can be reused; ``state`` reports the outcome of the latest call.

    Example:
        >>> converter = ReactToHorizonConverter()
        >>> result = converter.convert(source)
        >>> if result.success:
        ...     print(result.code)
    """

    def __init__(self, config: Optional[ConverterConfig] = None,
                 component_converter: Optional[ComponentConverter] = None):
        """Initialize the converter.

        Args:
            config: Converter options (defaults when None)
            component_converter: Component converter to delegate to
        """
        self.config = config or ConverterConfig()
        self.component_converter = component_converter or ComponentConverter()
        self.state = PipelineState.IDLE

    def import_preamble(self) -> str:
        """Return the fixed Horizon import header."""
        names = ', '.join(HORIZON_IMPORTS)
        return f"{PREAMBLE_HEADER}\nimport {{ {names} }} from '{self.config.import_module}';"

    def convert(self, source: str) -> ConversionResult:
        """Convert React source text to Horizon UI source text.

        Never raises: any failure during conversion becomes the single
        entry in ``errors``, with empty ``code`` and no components.

        Args:
            source: React component source text

        Returns:
            ConversionResult with the converted code and diagnostics
        """
        context = ConversionContext(config=self.config)
        self.state = PipelineState.RUNNING
        logger.info("Starting React to Horizon conversion")

        try:
            body = self.component_converter.convert(strip_imports(source), context)
            code = f"{self.import_preamble()}\n\n{body.strip()}\n"
        except Exception as e:
            failure = ConversionFailure(str(e), cause=e)
            logger.error(str(failure))
            logger.debug("Conversion failure details", exc_info=True)
            context.errors.append(str(failure))
            self.state = PipelineState.FAILED
            return ConversionResult(
                success=False,
                code="",
                errors=context.errors,
                warnings=context.warnings,
                components=[],
            )

        if not context.components:
            context.warn("No React components found - output contains only the Horizon imports and the input")

        self.state = PipelineState.COMPLETED
        logger.info(
            f"Converted {len(context.components)} component(s) "
            f"with {len(context.warnings)} warning(s)"
        )
        return ConversionResult(
            success=not context.errors,
            code=code,
            errors=context.errors,
            warnings=context.warnings,
            components=context.components,
        )
