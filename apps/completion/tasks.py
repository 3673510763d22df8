import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="completion.run_activity_criteria_cron")
def run_activity_criteria_cron_task():
    """
    Celery task recording activity criteria completions for all courses.
    Scheduled through CELERY_BEAT_SCHEDULE.
    """
    logger.info("Celery task received: Run activity criteria cron")
    # Import here so the task module loads before the app registry is ready
    from .criteria import ActivityCriterion

    try:
        recorded = ActivityCriterion.cron()
    except Exception as e:
        logger.error(f"Celery task failed during activity criteria cron: {e}", exc_info=True)
        raise
    return recorded
