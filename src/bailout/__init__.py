"""bailout: raise inside, return at the boundary.

Code inside a module signals failure by raising through must/fail, and a
few designated boundaries (handle, wrap, the catch family, @checked) turn
those failures back into returned (values..., error) tuples. Only Failure
is ever intercepted; every other exception keeps propagating untouched.

Flat imports (preferred):
    from bailout import must1, fail, failf, handle, wrap, Slot
    from bailout import catch, catch1, checked, pass_

Submodule imports (for organization):
    from bailout.must import must, must1, must2, must3, must4
    from bailout.handle import handle, wrap, Slot
    from bailout.transforms import annotate, suppress

Example:
    ```python
    from bailout import Slot, handle, must1

    def get_prices(db, sym):
        out = Slot()
        with handle(out):
            stmt = must1(*db.prepare('SELECT o, h, l, c FROM price WHERE sym = ?'))
            return must1(*stmt.query(sym)), None
        return None, out.error
    ```

bailout is slower than returning errors conventionally, especially when
failures are common: keep it out of tight loops (see benchmarks/).
"""

# Configuration
from bailout._config import BailoutConfig, get_config, init

# Logging
from bailout._logging import configure_logging, get_logger

# Catch family
from bailout.catch import catch, catch1, catch2, catch3, catch4, pass_

# Cause chains
from bailout.chain import find_cause, is_caused_by, iter_causes, unwrap

# Decorators
from bailout.decorators import checked

# Payload
from bailout.failure import Failure, NilCauseError

# Boundaries
from bailout.handle import Slot, Transform, handle, wrap

# Raise primitives
from bailout.must import fail, failf, must, must1, must2, must3, must4

# Stack capture
from bailout.stack import Frame, StackError

# Transforms
from bailout.transforms import AnnotatedError, annotate, replace, suppress

__all__ = [
    'AnnotatedError',
    'BailoutConfig',
    'Failure',
    'Frame',
    'NilCauseError',
    'Slot',
    'StackError',
    'Transform',
    'annotate',
    'catch',
    'catch1',
    'catch2',
    'catch3',
    'catch4',
    'checked',
    'configure_logging',
    'fail',
    'failf',
    'find_cause',
    'get_config',
    'get_logger',
    'handle',
    'init',
    'is_caused_by',
    'iter_causes',
    'must',
    'must1',
    'must2',
    'must3',
    'must4',
    'pass_',
    'replace',
    'suppress',
    'unwrap',
    'wrap',
]
