#!/usr/bin/env python
"""Script to run the Django development server."""

import os
import sys

from django.core.management import call_command, execute_from_command_line


def main():
    """Apply migrations, then run the Django development server.

    Extra command-line arguments (for example an address:port) are passed
    through to runserver.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "preference_service.settings")

    import django  # noqa: PLC0415

    django.setup()
    call_command("migrate", interactive=False, verbosity=1)

    execute_from_command_line([sys.argv[0], "runserver", *sys.argv[1:]])


if __name__ == "__main__":
    main()
