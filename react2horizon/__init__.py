"""React to Meta Horizon Worlds UIComponent source converter.

Rewrites React function and class components (JSX, hooks) into Horizon
UIComponent classes built from nested View/Text/Pressable/Image/DynamicList
calls, and reports what could not be converted faithfully.
"""

__version__ = "0.1.0"
