"""MathWizard backend: accounts, child learners and curriculum topics."""

__version__ = "1.0.0"
