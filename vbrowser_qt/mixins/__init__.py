from vbrowser_qt.mixins.layout import LayoutMixin
from vbrowser_qt.mixins.surfaces import SurfaceTabsMixin
from vbrowser_qt.mixins.window_state import WindowStateMixin

__all__ = [
    "LayoutMixin",
    "SurfaceTabsMixin",
    "WindowStateMixin",
]
