"""Bijections between finite types and integer ranges, and the array-backed
maps built on them.

>>> from linearize import StaticMap
>>> m = StaticMap.from_fn(bool, lambda key: 22 if key else 11)
>>> m.to_list()
[11, 22]
"""

from . import constants as _constants
from . import errors as _errors
from . import bijection as _bijection
from . import maps as _maps
from . import document as _document
from .constants import *  # noqa: F401,F403
from .errors import *  # noqa: F401,F403
from .bijection import *  # noqa: F401,F403
from .maps import *  # noqa: F401,F403
from .document import *  # noqa: F401,F403

__all__ = []
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_errors, "__all__", [])
__all__ += getattr(_bijection, "__all__", [])
__all__ += getattr(_maps, "__all__", [])
__all__ += getattr(_document, "__all__", [])
