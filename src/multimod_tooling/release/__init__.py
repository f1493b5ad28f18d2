"""Release commands: tag, sync, prerelease, verify."""

from .prerelease import run as run_prerelease
from .sync import run as run_sync
from .tag import run as run_tag
from .verify import run as run_verify

__all__ = ["run_prerelease", "run_sync", "run_tag", "run_verify"]
