"""HTTP boundary of the mood playlist service."""
