"""IAM helpers for compute unit permission grants."""

from . import utils  # noqa: F401

__all__ = ["utils"]
