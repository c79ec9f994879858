# MIT License
"""Runtime configuration: logging and preset scenarios."""
from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from .params import CalculatorInputs

LOG_LEVEL_ENV = "CARBON_LOG_LEVEL"
PRESET_DIR = Path(__file__).resolve().parent.parent / "assets" / "presets"


def get_log_level() -> str:
    return os.getenv(LOG_LEVEL_ENV, "INFO").upper()


def configure_logging(level: Optional[str] = None) -> None:
    """Send loguru output to stderr at `level` (default from ``CARBON_LOG_LEVEL``)."""
    logger.remove()
    logger.add(sys.stderr, level=level or get_log_level())


def list_presets(preset_dir: Union[str, Path] = PRESET_DIR) -> List[str]:
    return sorted(p.stem for p in Path(preset_dir).glob("*.json"))


def load_preset(name: str, preset_dir: Union[str, Path] = PRESET_DIR) -> CalculatorInputs:
    """Load a preset from the presets folder.

    If the file does not exist or is malformed, returns the default
    CalculatorInputs.
    """
    path = Path(preset_dir) / f"{name}.json"
    try:
        return CalculatorInputs.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.warning("Could not load preset {!r}: {}", name, e)
        return CalculatorInputs()
