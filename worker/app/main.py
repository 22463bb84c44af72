# worker/app/main.py
import logging

from filtervalues.celery_config.app import create_celery_app
from filtervalues.core.config import settings
from filtervalues.services.filter_values import get_default_registry

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


def log_registered_filters() -> None:
    registry = get_default_registry()
    for definition in registry.list_definitions():
        tasks = ", ".join(t.value for t in definition.supported_tasks)
        logger.info(f"Filter method '{definition.name}' available for tasks: {tasks}")
    logger.info(f"{len(registry)} filter methods registered.")


# --- Worker Initialization ---
logger.info("Filter values worker starting up...")
logger.info(f"Log Level: {settings.LOG_LEVEL}")
logger.info(f"Broker URL: {settings.CELERY_BROKER_URL}")
logger.info(
    f"Result Backend: {'Configured' if settings.CELERY_RESULT_BACKEND else 'Not Configured'}"
)

log_registered_filters()

celery_app = create_celery_app(
    main_name="filter_values_worker",
    include_tasks=["worker.app.tasks"],
)
logger.info(
    f"Celery app created for filter values worker, consuming queue '{celery_app.conf.task_default_queue}'."
)

if __name__ == "__main__":
    celery_app.start()
