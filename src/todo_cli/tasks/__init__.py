"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and JSON records
- task_store.py: JSON file storage with atomic replace and corruption recovery
- task_ops.py: pure add/complete/edit/remove operations over a task list
"""
