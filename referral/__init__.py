"""Deferred deep link referral tracking: clipboard discovery, validation, attribution."""

from referral.tracker import ReferralAttributionTracker

__all__ = ["ReferralAttributionTracker"]
