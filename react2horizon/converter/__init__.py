"""React to Horizon UI conversion engine."""

from .component_converter import ComponentConverter
from .errors import ConversionFailure, ConverterError, MarkupSyntaxError
from .hook_extractor import HookExtractor
from .markup_lowering import MarkupLowering
from .models import ConversionContext, PipelineState
from .pipeline import ReactToHorizonConverter
from .reference_rewriter import qualify

__all__ = [
    'ComponentConverter',
    'ConversionContext',
    'ConversionFailure',
    'ConverterError',
    'HookExtractor',
    'MarkupLowering',
    'MarkupSyntaxError',
    'PipelineState',
    'ReactToHorizonConverter',
    'qualify',
]
