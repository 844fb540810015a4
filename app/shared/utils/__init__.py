"""Shared utilities: datetime and id generators."""

from app.shared.utils.datetime import epoch_millis, utc_now
from app.shared.utils.generators import generate_cuid

__all__ = [
    "epoch_millis",
    "generate_cuid",
    "utc_now",
]
