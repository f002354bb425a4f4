from .data.models import Revision  # noqa: F401
