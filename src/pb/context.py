"""pb context for passing state between commands."""

from pathlib import Path
from typing import Optional

import click


class PBContext:
    def __init__(self):
        # --config value; None falls back to $PB_CONFIG and the user config dir
        self.config_path: Optional[Path] = None


pass_context = click.make_pass_decorator(PBContext, ensure=True)
