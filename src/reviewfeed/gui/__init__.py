"""Presentation-side logic that does not depend on widgets."""
