"""Core domain package for dailytext.

Core contains extraction, note path and scheduling logic without any HTTP,
vault or storage-specific code, keeping the business logic portable.
"""
