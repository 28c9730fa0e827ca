"""Bijections between finite types and ranges of natural numbers.

| Layer                  | Purpose                                        |
<----------------------- + ---------------------------------------------- >
| **core**               | ``Linearization`` protocol and registry         |
| **primitives**         | bool, unit, never, fixed-width ints, enums      |
| **compose**            | products (mixed radix) and sums (ranges)        |
| **derive**             | ``@linearizable`` / ``@linearizable_union``     |
| **resolve**            | typing constructs -> linearizations             |
| **linearized**         | cached, range-checked indices                   |
| **variants**           | double-ended enumeration of every value         |
"""

from . import core as _core
from . import variants as _variants
from . import linearized as _linearized
from . import primitives as _primitives
from . import compose as _compose
from . import resolve as _resolve
from . import derive as _derive

from .core import *
from .variants import *
from .linearized import *
from .primitives import *
from .compose import *
from .resolve import *
from .derive import *

__all__ = []
for module in (_core, _variants, _linearized, _primitives, _compose, _resolve, _derive):
    __all__.extend(getattr(module, "__all__", []))
__all__ = list(dict.fromkeys(__all__))
