from django.core.management.base import BaseCommand

from revisions.services.reminders import send_due_reminders


class Command(BaseCommand):
    help = "Send one reminder to every user with revisions due today"

    def handle(self, *args, **options):
        results = send_due_reminders()
        style = self.style.SUCCESS if results["errors"] == 0 else self.style.WARNING
        self.stdout.write(
            style(
                f"Reminders sent: {results['revision_reminders']} "
                f"(owners: {results['owners']}, errors: {results['errors']})"
            )
        )
