"""Delay Reporter Policy Module - Runtime policy loading and validation."""

from .policy_loader import (
    PolicyLoader,
    PolicyValidationError,
    get_policy_loader,
    reset_policy_loader,
)

__all__ = [
    "PolicyLoader",
    "PolicyValidationError",
    "get_policy_loader",
    "reset_policy_loader",
]
