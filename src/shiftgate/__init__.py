"""Timezone-aware shift scheduling and check-in eligibility engine."""

from shiftgate.scheduling import EligibilityReason, EligibilityResult, WorkPattern, evaluate

__all__ = ["EligibilityReason", "EligibilityResult", "WorkPattern", "evaluate"]
__version__ = "0.1.0"
