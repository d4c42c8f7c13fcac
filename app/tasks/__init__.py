"""
Celery tasks package initialization.
"""
from app.tasks.product_tasks import *
