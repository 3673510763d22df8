"""Management command to record activity criteria completions for all courses."""

from django.core.management.base import BaseCommand

from apps.completion.criteria import ActivityCriterion
from apps.completion.tasks import run_activity_criteria_cron_task


class Command(BaseCommand):
    help = "Record completion for users whose criteria activities are already complete"

    def add_arguments(self, parser):
        parser.add_argument(
            "--async",
            action="store_true",
            dest="run_async",
            help="Queue the job on Celery instead of running it here",
        )

    def handle(self, *args, **options):
        if options["run_async"]:
            result = run_activity_criteria_cron_task.delay()
            self.stdout.write(f"Queued activity criteria cron as task {result.id}")
            return

        self.stdout.write("Running activity criteria cron...")
        recorded = ActivityCriterion.cron()
        self.stdout.write(self.style.SUCCESS(f"Recorded completions: {recorded}"))
