"""Data models for converter configuration."""

from dataclasses import dataclass


STATE_STYLE_BINDING = "binding"
STATE_STYLE_FIELD = "field"
STATE_STYLES = (STATE_STYLE_BINDING, STATE_STYLE_FIELD)


@dataclass
class ConverterConfig:
    """Options controlling the shape of the generated Horizon source.

    Attributes:
        state_style: "binding" wraps state in Binding<T> containers whose
                     accessors call .set(); "field" emits plain typed fields
                     whose accessors assign directly
        import_module: Module path used in the generated Horizon import
        output_suffix: Suffix appended to the input stem when the CLI writes
                       a result file
        effect_summary_length: Maximum characters of an effect body kept in
                               ComponentInfo.effects summaries
    """
    state_style: str = STATE_STYLE_BINDING
    import_module: str = "../horizon_ui"
    output_suffix: str = ".horizon.ts"
    effect_summary_length: int = 50

    @property
    def uses_bindings(self) -> bool:
        return self.state_style == STATE_STYLE_BINDING
