"""Review list view-models.

Only the Qt-free pieces are exported here; import
:mod:`reviewfeed.gui.viewmodels.row_catalog` and
:mod:`reviewfeed.gui.viewmodels.avatars` directly, they pull in PySide6.
"""

from .pagination_controller import PaginationController, should_load_next_page
from .signal import Signal

__all__ = ["PaginationController", "Signal", "should_load_next_page"]
