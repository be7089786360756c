"""
Shared Kernel

Error taxonomy and API plumbing shared by every exchange app.
"""
