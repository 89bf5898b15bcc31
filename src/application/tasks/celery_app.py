"""
Celery application initialization for the NBN order pipeline.

Creates the Celery app used by the order submission and dispatch tasks:
1. Connection to Redis broker
2. Result backend storage (task faults surface here)
3. Optional beat schedule for periodic dispatch

Architecture Note:
- Part of Application Layer (orchestration)
- Uses environment variables for configuration
- No business logic - pure infrastructure setup
"""

import logging
import os
from datetime import datetime

from celery import Celery
from celery.signals import worker_init
from dotenv import load_dotenv

from src.domain.applications.order_config import OrderPipelineConfig

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create Celery instance with config from environment
celery_app = Celery(
    "nbn_orders",
    broker=os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0"),
    backend=os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/1"),
)

# Basic configuration
celery_app.conf.update(
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    result_expires=3600,  # Results expire after 1 hour
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
)

# Periodic dispatch, only when an interval is configured
_dispatch_interval = os.environ.get("NBN_DISPATCH_INTERVAL_SECONDS")
if _dispatch_interval:
    celery_app.conf.beat_schedule = {
        "dispatch-nbn-orders": {
            "task": "dispatch_nbn_orders",
            "schedule": float(_dispatch_interval),
        }
    }

# Register @celery_app.task functions from src.application.tasks.order_tasks
celery_app.autodiscover_tasks(["src.application.tasks"], related_name="order_tasks")


@celery_app.task(name="health_check")
def health_check() -> dict:
    """
    Simple health check task to verify Celery-Redis connection.

    Returns:
        dict: Status information with timestamp
            - status (str): "ok" if healthy
            - message (str): Human-readable status message
            - timestamp (str): ISO format timestamp
            - worker (str): Worker hostname that executed the task

    Example:
        >>> from src.application.tasks.celery_app import health_check
        >>> result = health_check.delay()
        >>> result.get(timeout=5)["status"]
        'ok'
    """
    return {
        "status": "ok",
        "message": "Celery worker is healthy",
        "timestamp": datetime.now().isoformat(),
        "worker": (
            celery_app.current_task.request.hostname
            if celery_app.current_task
            else "unknown"
        ),
    }


@worker_init.connect
def validate_order_pipeline_config(**kwargs) -> None:
    """
    Read the order pipeline configuration once when the worker starts.

    A bad NBN_B2B_TIMEOUT or ORDER_UPDATE_RETRY_ATTEMPTS is reported at
    startup instead of on the first submit_nbn_order task.

    Raises:
        ValueError: If a pipeline setting cannot be parsed or is out of range
    """
    try:
        config = OrderPipelineConfig.from_env()
    except ValueError as e:
        logger.critical(f"Invalid order pipeline configuration: {e}")
        raise

    if not config.b2b_endpoint:
        logger.warning("NBN_B2B_ENDPOINT is not set, every NBN order will fail")
