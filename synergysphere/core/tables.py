#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Database Schema
Таблицы хранилища (SQLAlchemy Core)
"""

import uuid

from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, MetaData, String, Table, Text,
    UniqueConstraint
)

from synergysphere.models.enums import ProjectRole, TaskStatus
from synergysphere.utils.datetime_utils import utcnow

metadata = MetaData()


def new_id() -> str:
    return str(uuid.uuid4())


# Таблица пользователей (заполняется провайдером авторизации)
users_table = Table(
    'user', metadata,
    Column('id', String(64), primary_key=True),
    Column('name', Text, nullable=False),
    Column('email', String(320), nullable=False, unique=True),
    Column('email_verified', Boolean, nullable=False, default=False),
    Column('image', Text),
    Column('created_at', DateTime, nullable=False, default=utcnow),
    Column('updated_at', DateTime, nullable=False, default=utcnow, onupdate=utcnow)
)

# Таблица сессий (только чтение)
sessions_table = Table(
    'session', metadata,
    Column('id', String(64), primary_key=True, default=new_id),
    Column('token', String(255), nullable=False, unique=True),
    Column('user_id', String(64), ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
    Column('expires_at', DateTime, nullable=False),
    Column('ip_address', Text),
    Column('user_agent', Text),
    Column('created_at', DateTime, nullable=False, default=utcnow),
    Column('updated_at', DateTime, nullable=False, default=utcnow)
)

# Таблица проектов
projects_table = Table(
    'project', metadata,
    Column('id', String(36), primary_key=True, default=new_id),
    Column('name', Text, nullable=False),
    Column('description', Text),
    Column('created_by_id', String(64), ForeignKey('user.id', ondelete='SET NULL')),
    Column('created_at', DateTime, nullable=False, default=utcnow),
    Column('updated_at', DateTime, nullable=False, default=utcnow, onupdate=utcnow)
)

# Участники проектов
project_members_table = Table(
    'project_member', metadata,
    Column('id', String(36), primary_key=True, default=new_id),
    Column('project_id', String(36), ForeignKey('project.id', ondelete='CASCADE'), nullable=False),
    Column('user_id', String(64), ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
    Column('role', Enum(ProjectRole, name='project_role', values_callable=lambda e: [m.value for m in e]),
           nullable=False, default=ProjectRole.MEMBER),
    Column('joined_at', DateTime, nullable=False, default=utcnow),
    UniqueConstraint('project_id', 'user_id', name='uq_project_member')
)

# Таблица задач
tasks_table = Table(
    'task', metadata,
    Column('id', String(36), primary_key=True, default=new_id),
    Column('title', Text, nullable=False),
    Column('description', Text),
    Column('status', Enum(TaskStatus, name='task_status'), nullable=False, default=TaskStatus.TODO),
    Column('priority', String(16)),
    Column('due_date', DateTime),
    Column('estimated_hours', Text),
    Column('project_id', String(36), ForeignKey('project.id', ondelete='CASCADE'), nullable=False),
    Column('assignee_id', String(64), ForeignKey('user.id', ondelete='SET NULL')),
    Column('created_by_id', String(64), ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
    Column('created_at', DateTime, nullable=False, default=utcnow),
    Column('updated_at', DateTime, nullable=False, default=utcnow, onupdate=utcnow)
)

# Таблица уведомлений
notifications_table = Table(
    'notification', metadata,
    Column('id', String(36), primary_key=True, default=new_id),
    Column('user_id', String(64), ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
    Column('message', Text, nullable=False),
    Column('type', String(64), nullable=False),
    Column('project_id', String(36), ForeignKey('project.id', ondelete='CASCADE')),
    Column('task_id', String(36), ForeignKey('task.id', ondelete='CASCADE')),
    Column('is_read', Boolean, nullable=False, default=False),
    Column('created_at', DateTime, nullable=False, default=utcnow)
)
