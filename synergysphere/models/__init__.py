#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Models Package
Типизированные записи и перечисления
"""

from .enums import (
    TaskStatus,
    TaskPriority,
    ProjectRole,
    NotificationTypes
)

from .records import (
    Actor,
    Session,
    UserSummary,
    Task,
    ProjectMember,
    Notification,
    UpcomingTask
)

__all__ = [
    # Enums
    'TaskStatus',
    'TaskPriority',
    'ProjectRole',
    'NotificationTypes',

    # Records
    'Actor',
    'Session',
    'UserSummary',
    'Task',
    'ProjectMember',
    'Notification',
    'UpcomingTask'
]
