"""Pydantic schemas for request/response validation."""

from .booking import *  # noqa: F403
from .catalog import *  # noqa: F403
from .common import *  # noqa: F403
from .dashboard import *  # noqa: F403
from .email import *  # noqa: F403
from .health import *  # noqa: F403
from .review import *  # noqa: F403
from .settings import *  # noqa: F403
from .trip_plan import *  # noqa: F403
