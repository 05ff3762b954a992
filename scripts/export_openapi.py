"""Write the recipe guide OpenAPI document to docs/openapi.json."""

import json
from pathlib import Path

from recipe_guide.core.config import Settings
from recipe_guide.factory import create_app


# Docs are only served outside production, so build a development app
app = create_app(Settings(APP_ENV="development"))

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
with output.open("w", encoding="utf-8") as f:
    json.dump(app.openapi(), f, indent=2)
