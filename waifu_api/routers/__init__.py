"""Expose routers to be imported in waifu_api.main."""
from . import (
    health,
    media,
    users,
    utils,
)  # noqa: F401
