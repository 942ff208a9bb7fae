"""SnapAML onboarding backend: KYB/KYC wizard, verification requests, badge lookup."""

__version__ = "0.1.0"
