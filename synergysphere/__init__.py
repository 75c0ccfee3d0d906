"""
SynergySphere - API командной работы: проекты, задачи, уведомления
"""

__version__ = "1.0.0"
