"""
Core building blocks shared by every domain: DDD base classes, logging,
dependency container and application wiring.
"""
