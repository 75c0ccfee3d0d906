from . import notifications, tasks, users

__all__ = ['notifications', 'tasks', 'users']
