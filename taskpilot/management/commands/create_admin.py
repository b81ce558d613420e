from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError

from taskpilot.constants.role import Role
from taskpilot.models.user import UserModel
from taskpilot.repositories.user_repository import UserRepository


class Command(BaseCommand):
    help = "Create an Admin account, or promote an existing account to Admin. The account is marked protected."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--name", default="Admin")
        parser.add_argument("--password", help="Required when the account does not exist yet")
        parser.add_argument(
            "--unprotected",
            action="store_true",
            help="Leave isProtectedAccount unset so the account's role can be changed later",
        )

    def handle(self, *args, **options):
        email = options["email"].lower()
        protected = not options["unprotected"]
        user = UserRepository.get_by_email(email)

        if user:
            UserRepository.update(user.id, {"role": Role.ADMIN.value, "isProtectedAccount": protected})
            self.stdout.write(self.style.SUCCESS(f"Promoted {email} to Admin."))
            return

        if not options["password"]:
            raise CommandError(f"No account for {email}; pass --password to create one.")

        user = UserRepository.create(
            UserModel(
                name=options["name"],
                email=email,
                password=make_password(options["password"]),
                role=Role.ADMIN,
                isProtectedAccount=protected,
            )
        )
        self.stdout.write(self.style.SUCCESS(f"Created Admin {email} ({user.id})."))
