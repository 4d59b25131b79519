from .bus import Bus as Bus
from .config import Settings as Settings
from .cursor import END as END
from .cursor import Cursor as Cursor
from .cursor import Exhausted as Exhausted
from .emit import emit as emit
from .gather import gather as gather
from .pause import pause as pause
from .producer import producer as producer
from .sequence import AlreadyRunning as AlreadyRunning
from .sequence import Closed as Closed
from .sequence import Sequence as Sequence
from .suspension import Suspension as Suspension
