# backend/app/core/celery_app.py
import logging

from filtervalues.celery_config.app import create_celery_app

logger = logging.getLogger(__name__)

# Sender only, tasks run in the filter values worker
backend_celery_app = create_celery_app(main_name="backend_sender")

if not backend_celery_app.conf.result_backend:
    logger.warning(
        "Celery result backend is not configured for the backend sender. Task status polling will not work."
    )
