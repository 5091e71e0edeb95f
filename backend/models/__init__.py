# Pydantic models shared by services and routes

from models.task import Category, Priority, Status, Task, TaskCreate, TaskUpdate, StatusUpdate, Profile

__all__ = [
    "Category",
    "Priority",
    "Status",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "StatusUpdate",
    "Profile",
]
