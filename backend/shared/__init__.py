"""
Shared module for common utilities across the REST API and the CLI.

CLEAN ARCHITECTURE STRUCTURE:
- shared.security: Authentication and password hashing
  - auth.py: JWT issue/verification, current_user_context
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID propagation into logs

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Languages, content kinds, allergen and dietary vocabularies

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Input validation, SSRF prevention
  - schemas.py: Auth schemas
  - dashboard_schemas.py: Restaurant, menu, item, translation and AI DTOs
  - localization.py: DefaultText / TranslatedText resolution

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Languages, ContentKind
    from shared.utils.exceptions import NotFoundError, ForbiddenError
    from shared.utils.localization import localize
"""
