"""
Random Picker: weighted random choice from a compact definition string.

    apple;pear:2;plum:8 3 1

picks three distinct values, pear twice as likely as apple and plum eight
times as likely. Used definitions are kept in a history, the ones worth
keeping in a favorites list; both persist across sessions.
"""

__version__ = "0.1.0"

from .core import (
    init_picker,
    PICKER_DIR,
    STORE_PATH,
    HISTORY_LIMIT,
    NO_REPEAT_LIMIT,
)

from .errors import (
    PickerError,
    ParseError,
    WeightOverflowError,
    UnselectableDefinitionError,
    PersistenceError,
)

from .parser import (
    RandomItem,
    PickRequest,
    parse_definition,
    parse_request,
    check_count,
)

from .sampler import (
    select_index,
    sample,
    pick,
    PickOutcome,
)

from .store import (
    PickerStore,
    StoreRecord,
    JsonFilePersistence,
    MemoryPersistence,
)

from .ranking import (
    Entry,
    ContextAction,
    fix_position_as_score,
)

from .picker import (
    RandomPicker,
    RecordingHost,
    Host,
    Menu,
)
