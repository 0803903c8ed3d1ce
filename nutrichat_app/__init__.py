"""nutrichat_app package init: keep imports lightweight to avoid side-effects.

Modules should be imported explicitly from their full paths, e.g.
`from nutrichat_app.api import create_app` or `from nutrichat_app.core.config import get_settings`.
"""

__all__ = []
