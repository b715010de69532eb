from __future__ import annotations

"""Configuration loading and validation for chordear.

This module loads the YAML application settings and the chord catalog,
applies defaults, and validates enumerations for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..theory.catalog import CatalogError, ChordCatalog


ALLOWED_BACKENDS = {"sounddevice", "none"}
ALLOWED_TONES = {"sine", "square", "sawtooth", "triangle", "piano"}

MIN_CHORDS, MAX_CHORDS, DEFAULT_CHORDS = 1, 16, 4
MIN_BPM, MAX_BPM, DEFAULT_BPM = 30, 240, 90

DEFAULT_CATALOG_PATH = Path(__file__).with_name("chords.yml")


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def clamp_chord_count(value: Any) -> int:
    """Clamp the requested number of exercise chords to 1..16 (bad input -> 4)."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return DEFAULT_CHORDS
    if n == 0:
        return DEFAULT_CHORDS
    return max(MIN_CHORDS, min(MAX_CHORDS, n))


def clamp_bpm(value: Any) -> float:
    """Clamp a tempo to 30..240 bpm (bad or zero input -> 90)."""
    try:
        bpm = float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_BPM)
    if not bpm:
        return float(DEFAULT_BPM)
    return float(max(MIN_BPM, min(MAX_BPM, bpm)))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("audio", {})
    cfg.setdefault("exercise", {})
    cfg.setdefault("catalog", {})

    audio = cfg["audio"]
    exercise = cfg["exercise"]
    catalog = cfg["catalog"]

    audio.setdefault("backend", "sounddevice")
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("blocksize", 256)
    audio.setdefault("tone", "triangle")
    audio.setdefault("gain", 0.27)
    audio.setdefault("lookahead_s", 0.06)

    exercise.setdefault("chords", DEFAULT_CHORDS)
    exercise.setdefault("bpm", DEFAULT_BPM)
    exercise.setdefault("auto_play", True)
    exercise.setdefault("roots", "")

    catalog.setdefault("path", None)

    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported audio backend '{backend}', falling back to 'sounddevice'.")
        audio["backend"] = "sounddevice"

    tone = audio.get("tone")
    if tone not in ALLOWED_TONES:
        print(f"WARNING: Unsupported tone '{tone}', using 'triangle'.")
        audio["tone"] = "triangle"

    audio["sample_rate"] = int(audio["sample_rate"])
    audio["blocksize"] = int(audio["blocksize"])
    audio["gain"] = float(audio["gain"])
    audio["lookahead_s"] = max(0.0, float(audio["lookahead_s"]))

    exercise["chords"] = clamp_chord_count(exercise.get("chords"))
    exercise["bpm"] = clamp_bpm(exercise.get("bpm"))
    exercise["auto_play"] = bool(exercise.get("auto_play"))
    exercise["roots"] = str(exercise.get("roots") or "")

    return cfg


def load_catalog(path: Optional[str] = None) -> ChordCatalog:
    """Load the chord catalog (YAML or JSON) and build a ChordCatalog.

    Raises:
        CatalogError: if the file is missing, unparseable or malformed.
    """
    p = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Chord catalog not found: {p}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Could not parse chord catalog {p}: {e}") from e
    return ChordCatalog.from_dict(data or {})
