"""
Core synchronization logic.

Components:
- session.py: TodoSession, the local mirror of the Task Service
- ports.py: the TaskService Protocol the session depends on
- errors.py: NetworkFailure / ServerError / ParseFailure
"""
