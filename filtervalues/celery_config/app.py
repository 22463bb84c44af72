# filtervalues/celery_config/app.py
from typing import List, Optional

from celery import Celery

from filtervalues.core.config import settings


def create_celery_app(
    main_name: str,
    include_tasks: Optional[List[str]] = None,
) -> Celery:
    """Creates and configures a Celery application instance."""
    backend_url = (
        str(settings.CELERY_RESULT_BACKEND) if settings.CELERY_RESULT_BACKEND else None
    )

    app = Celery(
        main_name,
        broker=str(settings.CELERY_BROKER_URL),
        backend=backend_url,
        include=include_tasks or [],
    )

    # Job payloads and results are plain JSON (records, floats and nulls)
    app.conf.update(
        task_track_started=True,
        result_expires=3600,
        broker_connection_retry_on_startup=True,
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        task_default_queue=settings.FILTER_VALUES_QUEUE,
        task_routes={
            "tasks.compute_filter_values": {"queue": settings.FILTER_VALUES_QUEUE},
        },
    )
    return app
