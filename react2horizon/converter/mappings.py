"""React to Horizon UI mapping tables.

Single source of truth for attribute, tag, hook and lifecycle semantics.
Adding a mapping is a data change here; the attribute parser and markup
lowering engine only consult these tables.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

# Horizon UI constructors
VIEW = "View"
TEXT = "Text"
PRESSABLE = "Pressable"
IMAGE = "Image"
DYNAMIC_LIST = "DynamicList"

HORIZON_IMPORTS = (
    "UIComponent",
    "UINode",
    "View",
    "Text",
    "Pressable",
    "Image",
    "ScrollView",
    "DynamicList",
    "Binding",
)

BASE_CLASS = "UIComponent"
RENDER_METHOD = "initializeUI"
RENDER_RETURN_TYPE = "UINode"

# Attribute transforms
TRANSFORM_IDENTITY = "identity"
TRANSFORM_STYLE = "style_object"
TRANSFORM_PLACEHOLDER = "class_placeholder"
TRANSFORM_DROP = "drop"

PRESS_HANDLER = "onPress"
STYLE = "style"


@dataclass(frozen=True)
class AttributeMapping:
    """How one React attribute maps onto a Horizon property.

    Attributes:
        target: Horizon property name, or None when no key is emitted
        transform: One of the TRANSFORM_* constants
        warning: Warning template ({value} is the attribute value)
        placeholder: Placeholder comment template emitted instead of a key
    """
    target: Optional[str]
    transform: str = TRANSFORM_IDENTITY
    warning: Optional[str] = None
    placeholder: Optional[str] = None


_CLASS_MAPPING = AttributeMapping(
    target=None,
    transform=TRANSFORM_PLACEHOLDER,
    warning='Converting className "{value}" to style object - manual conversion needed',
    placeholder='/* TODO: Convert className "{value}" to Horizon style */',
)

ATTRIBUTE_MAPPINGS: Dict[str, AttributeMapping] = {
    "className": _CLASS_MAPPING,
    "class": _CLASS_MAPPING,
    "style": AttributeMapping(target=STYLE, transform=TRANSFORM_STYLE),
    "onClick": AttributeMapping(target=PRESS_HANDLER),
    "onMouseEnter": AttributeMapping(target="onEnter"),
    "onMouseLeave": AttributeMapping(target="onExit"),
    "src": AttributeMapping(target="source"),
    "alt": AttributeMapping(target="accessibilityLabel"),
    "key": AttributeMapping(
        target=None,
        transform=TRANSFORM_DROP,
        warning="Dropping key attribute ({value}) - DynamicList manages item identity",
    ),
}

# Tag kinds
KIND_CONTAINER = "container"
KIND_TEXT = "text"
KIND_PRESSABLE = "pressable"
KIND_IMAGE = "image"


@dataclass(frozen=True)
class TagMapping:
    """How one markup tag lowers to a Horizon constructor.

    Attributes:
        constructor: Horizon constructor name
        kind: One of the KIND_* constants
        warning: Warning emitted every time the tag is lowered
        annotation: Comment placed before the lowered call
    """
    constructor: str
    kind: str
    warning: Optional[str] = None
    annotation: Optional[str] = None


def _landmark(tag: str) -> TagMapping:
    return TagMapping(
        constructor=VIEW,
        kind=KIND_CONTAINER,
        warning=f"Converting {tag} to View - consider appropriate Horizon component",
        annotation=f"/* TODO: <{tag}> has no Horizon equivalent */",
    )


_CONTAINER = TagMapping(constructor=VIEW, kind=KIND_CONTAINER)
_TEXT = TagMapping(constructor=TEXT, kind=KIND_TEXT)

TAG_MAPPINGS: Dict[str, TagMapping] = {
    # Generic structural wrappers
    "div": _CONTAINER,
    "section": _CONTAINER,
    "article": _CONTAINER,
    "form": _CONTAINER,
    "ul": _CONTAINER,
    "ol": _CONTAINER,
    "li": _CONTAINER,
    "fieldset": _CONTAINER,
    "": _CONTAINER,
    "Fragment": _CONTAINER,
    "React.Fragment": _CONTAINER,
    # Landmarks
    "header": _landmark("header"),
    "footer": _landmark("footer"),
    "nav": _landmark("nav"),
    "main": _landmark("main"),
    "aside": _landmark("aside"),
    # Text
    "h1": _TEXT,
    "h2": _TEXT,
    "h3": _TEXT,
    "h4": _TEXT,
    "h5": _TEXT,
    "h6": _TEXT,
    "p": _TEXT,
    "label": _TEXT,
    "strong": _TEXT,
    "em": _TEXT,
    "b": _TEXT,
    "i": _TEXT,
    "small": _TEXT,
    "span": TagMapping(
        constructor=TEXT,
        kind=KIND_TEXT,
        warning="Converting span to Text - verify if appropriate",
    ),
    # Pressables
    "button": TagMapping(constructor=PRESSABLE, kind=KIND_PRESSABLE),
    "a": TagMapping(
        constructor=PRESSABLE,
        kind=KIND_PRESSABLE,
        warning="Converting <a> to Pressable - href navigation needs manual handling",
    ),
    # Images
    "img": TagMapping(constructor=IMAGE, kind=KIND_IMAGE),
}

# Global functions that look like state setters but are not
NON_SETTER_GLOBALS: FrozenSet[str] = frozenset({
    "setTimeout",
    "setInterval",
    "setImmediate",
})

# React class lifecycle methods and their closest Horizon counterpart
LIFECYCLE_METHODS: Dict[str, str] = {
    "componentDidMount": "start",
    "componentDidUpdate": "start",
    "componentWillUnmount": "dispose",
    "shouldComponentUpdate": "start",
}

HOOK_WARNINGS: Dict[str, str] = {
    "useRef": "Converting useRef for {name} - replace with a class field",
    "useCallback": "Converting useCallback - dependencies [{deps}] are no longer tracked",
    "useMemo": "Converting useMemo - dependencies [{deps}] are no longer tracked",
}
