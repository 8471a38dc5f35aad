from .config import ConfigMissingError, OnboardingConfig
from .join_label import JoinLabelError, derive_join_label
from .onboarding_merger import OnboardingMerger
from .onboarding_reconciliation_service import OnboardingReconciliationService

__all__ = [
    'ConfigMissingError',
    'OnboardingConfig',
    'JoinLabelError',
    'derive_join_label',
    'OnboardingMerger',
    'OnboardingReconciliationService',
]
