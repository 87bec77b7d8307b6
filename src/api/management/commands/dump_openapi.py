"""Write the registration API's OpenAPI document to disk."""

import json
import typing as t
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandParser
from ninja.responses import NinjaJSONEncoder

from api.api import api


class Command(BaseCommand):
    help = "Write the OpenAPI schema of the ridelist API to a JSON file."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--output",
            default=str(settings.BASE_DIR.parent / ".artifacts" / "openapi.json"),
            help="Target file.",
        )

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        output_file = Path(options["output"])
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(json.dumps(api.get_openapi_schema(), indent=2, cls=NinjaJSONEncoder))
        self.stdout.write(self.style.SUCCESS(f"OpenAPI schema written to {output_file}"))
