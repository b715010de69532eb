from __future__ import annotations

"""Play every catalog chord in every inversion for one root.

Usage:
  python -m chordear.tools.play_catalog --root Eb --tone piano
"""

import argparse
import time

from ..audio.device import make_scheduler_from_config
from ..audio.scheduler import PlaybackOptions
from ..config.config import load_catalog, load_config, validate_config
from ..theory.voicing import voice_chord


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Play all catalog chords for one root")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--catalog", type=str, default=None, help="Path to chord catalog")
    p.add_argument("--root", type=str, default="C")
    p.add_argument("--tone", type=str, default=None)
    p.add_argument("--duration", type=float, default=0.8, help="Seconds per chord")
    return p.parse_args()


def main() -> None:
    args = _parse_args()
    cfg = load_config(args.config)
    if args.tone:
        cfg.setdefault("audio", {})["tone"] = args.tone
    cfg = validate_config(cfg)
    catalog = load_catalog(args.catalog or cfg["catalog"].get("path"))

    semi = catalog.semitone_for(args.root)
    if semi is None:
        raise SystemExit(f"Unknown root '{args.root}'")

    scheduler = make_scheduler_from_config(cfg)
    gap = 0.2
    for sec in catalog.sections:
        inv_ids = [inv.id for inv in sec.inversions] or [0]
        for ch in sec.chords:
            for inv in inv_ids:
                notes = voice_chord(semi, ch.intervals, inv)
                print(f"Playing: {args.root}{ch.symbol} ({sec.id}:{ch.id}) [{catalog.inversion_label(inv)}] -> {notes}")
                scheduler.play_chord(notes, args.duration, PlaybackOptions(peak_gain=0.3))
                time.sleep(args.duration + gap)


if __name__ == "__main__":
    main()
