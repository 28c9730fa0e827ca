"""Array-backed total maps keyed by linearizable types.

| Layer                  | Purpose                                        |
<----------------------- + ---------------------------------------------- >
| **storage**            | list and numpy backing arrays                   |
| **iters**              | keys, values, entries and snapshots             |
| **static_map**         | ``StaticMap``, one slot per key                 |
| **copy_map**           | ``StaticCopyMap``, plain-old-data values        |
| **builder**            | slot-by-slot construction                       |
| **serde**              | string-keyed mappings and JSON                  |
| **sampling**           | random maps from numpy generators               |
"""

from . import storage as _storage
from . import iters as _iters
from . import static_map as _static_map
from . import copy_map as _copy_map
from . import builder as _builder
from . import serde as _serde
from . import sampling as _sampling

from .storage import *
from .iters import *
from .static_map import *
from .copy_map import *
from .builder import *
from .serde import *
from .sampling import *

__all__ = []
for module in (_storage, _iters, _static_map, _copy_map, _builder, _serde, _sampling):
    __all__.extend(getattr(module, "__all__", []))
__all__ = list(dict.fromkeys(__all__))
