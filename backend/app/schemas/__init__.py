# backend/app/schemas/__init__.py
from .task import TaskResponse, TaskStatusEnum, TaskStatusResponse
