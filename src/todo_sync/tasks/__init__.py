"""
Task records.

Components:
- task_models.py: data structures (TaskRecord, TaskFilter, TaskStats) + wire decoding
"""
