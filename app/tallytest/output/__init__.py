"""Output channels and the summary report."""
