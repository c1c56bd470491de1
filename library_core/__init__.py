"""VIM Library core layer.

Shared pieces used by both the libraryd daemon (transport) and its clients.

Public Interface:
    Modules:
    - config: Settings and configuration loading
    - storage: Home/config directory resolution
    - errors: Error taxonomy shared by server and client
    - models: Directory listings, file records, folder entries
    - client: HTTP client for the libraryd API
    - navigation: Per-session navigation state machine
    - markdown: Markdown preview rendering
"""

from .errors import AccessDeniedError
from .errors import LibraryError
from .errors import NotFoundError
from .errors import UnsupportedTypeError
from .errors import ValidationError
from .models import DirectoryListing
from .models import FileRecord
from .models import FolderEntry

__all__ = [
    "LibraryError",
    "ValidationError",
    "AccessDeniedError",
    "NotFoundError",
    "UnsupportedTypeError",
    "DirectoryListing",
    "FileRecord",
    "FolderEntry",
]
