"""
Shared module for code used by the REST API and the CLI.

STRUCTURE:
- shared.infrastructure: Database and caching
  - db.py: SQLAlchemy sessions, safe_commit()
  - cache/: In-process cache (sliding + absolute expiration)
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Paging limits, sort orders, cache keys

- shared.utils: Utilities
  - exceptions.py: Store errors and HTTP exceptions with auto-logging

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.infrastructure.cache import MemoryCacheService
    from shared.config.settings import settings
    from shared.config.constants import Limits, CacheKeys
    from shared.utils.exceptions import InvalidSortFieldError, ValidationError
"""
