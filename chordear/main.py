from __future__ import annotations

"""CLI entry point for chordear."""

import argparse
import shlex
import sys
from typing import Callable, Dict, List, Optional

from . import __version__
from .app.explain import enable as explain_enable
from .app.session import Notice, Session, SessionSettings
from .audio.device import make_scheduler_from_config
from .audio.scheduler import AudioScheduler, Direction, Mixer
from .audio.synthesis import Tone
from .config.config import load_catalog, load_config, validate_config
from .exercise.grader import Evaluation, Verdict
from .theory.catalog import CatalogError, ChordCatalog
from .theory.chord import ChordKey
from .util.randomness import make_rng, seed_if_needed

HELP = """Commands:
  s                         start a new exercise
  n                         next exercise (all chords must be correct)
  g SLOT ROOT CHORD INV     answer a slot, e.g. 'g 1 Eb triads:min 1' or 'g 2 C aug 0'
  c SLOT                    clear a slot's answer
  e                         evaluate answers
  r | ra                    hear | arpeggiate the reference chord
  h SLOT | a SLOT | ad SLOT hear | arpeggiate up | arpeggiate down a chord
  p                         play reference + all chords
  show                      show the exercise and your answers
  opts                      list answer options (chords and inversions)
  bpm N | tone NAME         set tempo (30-240) | tone (sine, square, sawtooth, triangle, piano)
  roots TEXT                set the root list, e.g. 'roots C, F, Bb' (empty = defaults)
  section ID on|off         enable/disable a whole section
  chord SEC:ID on|off       enable/disable one chord type
  inv SEC ID on|off         enable/disable an inversion of a section
  x                         reset session score
  ?                         this help
  q                         quit"""

_MARKS = {Verdict.CORRECT: "✓", Verdict.WRONG: "✗", Verdict.UNANSWERED: "·"}


def _on_off(token: str) -> bool:
    t = token.lower()
    if t in ("on", "1", "yes", "true"):
        return True
    if t in ("off", "0", "no", "false"):
        return False
    raise ValueError(f"Expected on/off, got '{token}'")


def _slot(session: Session, token: str) -> int:
    idx = int(token) - 1
    if session.exercise is None or not 0 <= idx < len(session.exercise.sequence):
        raise IndexError(f"No chord {token} in the current exercise")
    return idx


def render_exercise(session: Session) -> str:
    if session.exercise is None:
        return "No exercise yet. Type 's' to start."
    lines = [f"Reference: {session.describe(session.exercise.reference)}"]
    for i, guess in enumerate(session.guesses):
        verdict = session.verdicts[i] if i < len(session.verdicts) else None
        mark = _MARKS.get(verdict, " ")
        if guess.root or guess.chord or guess.inversion:
            answer = f"{guess.root or '(root)'} {guess.chord or '(chord)'} {guess.inversion or '(inversion)'}"
        else:
            answer = "(no answer)"
        lines.append(f"  [{mark}] Chord {i + 1}: {answer}")
    return "\n".join(lines)


def render_options(session: Session) -> str:
    if session.pool is None:
        return "Config not loaded yet."
    lines = [f"Roots: {', '.join(session.pool.enabled_roots())}"]
    for section_label, options in session.pool.chord_choices():
        lines.append(f"{section_label}:")
        for key, display in options:
            invs = ", ".join(f"{inv.id}={inv.label}" for inv in session.pool.inversion_choices(key.section_id))
            lines.append(f"  {key}  {display}  [{invs or 'no inversions'}]")
    if len(lines) == 1:
        lines.append("No chord types enabled.")
    return "\n".join(lines)


def render_evaluation(session: Session, result: Evaluation) -> str:
    return "\n".join([result.status_text(), render_exercise(session), session.summary()])


def handle_command(session: Session, line: str, inform: Callable[[str], None]) -> bool:
    """Run one command line; return False when the user quits."""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        inform(f"Could not parse command: {e}")
        return True
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]

    try:
        if cmd in ("q", "quit", "exit"):
            return False
        if cmd in ("?", "help"):
            inform(HELP)
        elif cmd in ("s", "start", "n", "next"):
            res = session.start_exercise() if cmd in ("s", "start") else session.next_exercise()
            if isinstance(res, Notice):
                inform(res.message)
            else:
                inform("Exercise ready." if cmd in ("s", "start") else "New exercise ready.")
                inform(render_exercise(session))
                inform(session.summary())
        elif cmd in ("g", "guess"):
            if len(args) < 4:
                inform("Usage: g SLOT ROOT CHORD INVERSION")
            else:
                session.set_guess(_slot(session, args[0]), args[1], args[2], args[3])
        elif cmd in ("c", "clear"):
            if not args:
                inform("Usage: c SLOT")
            else:
                session.set_guess(_slot(session, args[0]))
        elif cmd in ("e", "eval", "evaluate"):
            res = session.evaluate()
            if isinstance(res, Notice):
                inform(res.message)
            else:
                inform(render_evaluation(session, res))
        elif cmd in ("r", "ra"):
            if session.exercise is None:
                inform("Start an exercise first.")
            elif cmd == "r":
                session.hear(session.exercise.reference)
            else:
                session.arpeggiate(session.exercise.reference)
        elif cmd in ("h", "a", "ad"):
            if not args:
                inform(f"Usage: {cmd} SLOT")
            else:
                idx = _slot(session, args[0])
                spec = session.exercise.sequence[idx]  # type: ignore[union-attr]
                if cmd == "h":
                    session.hear(spec)
                else:
                    session.arpeggiate(spec, Direction.DOWN if cmd == "ad" else Direction.UP)
        elif cmd in ("p", "play"):
            if not session.play_all():
                inform("Nothing to play yet.")
        elif cmd == "show":
            inform(render_exercise(session))
        elif cmd == "opts":
            inform(render_options(session))
        elif cmd == "bpm":
            inform(f"Tempo: {session.set_bpm(args[0] if args else None):g} bpm")
        elif cmd == "tone":
            session.set_tone(Tone(args[0] if args else "triangle"))
            inform(f"Tone: {args[0] if args else 'triangle'}")
        elif cmd == "roots":
            if session.pool is None:
                inform("Config not loaded yet.")
            else:
                session.pool.set_root_text(" ".join(args))
                inform(f"Roots: {', '.join(session.pool.enabled_roots())}")
        elif cmd == "section" and len(args) == 2 and session.pool is not None:
            session.pool.set_section_enabled(args[0], _on_off(args[1]))
        elif cmd == "chord" and len(args) == 2 and session.pool is not None:
            key = ChordKey.parse(args[0])
            if key is None:
                inform("Usage: chord SEC:ID on|off")
            else:
                session.pool.set_chord_enabled(key, _on_off(args[1]))
        elif cmd == "inv" and len(args) == 3 and session.pool is not None:
            session.pool.set_inversion_enabled(args[0], int(args[1]), _on_off(args[2]))
        elif cmd == "x":
            session.reset_stats()
            inform(session.summary())
        else:
            inform(f"Unknown command '{line.strip()}'. Type '?' for help.")
    except (IndexError, KeyError, ValueError) as e:
        inform(f"[WARN] {e}")
    return True


def run_loop(session: Session, ui: Dict[str, Callable]) -> None:
    ask = ui["ask"]
    inform = ui["inform"]
    inform(HELP)
    inform(session.summary())
    while True:
        try:
            line = ask("> ")
        except EOFError:
            break
        if not handle_command(session, line, inform):
            break
    inform("\nSession Summary:")
    inform(session.summary())


def _build_ui() -> Dict[str, Callable]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def _make_scheduler(cfg: Dict, no_audio: bool) -> AudioScheduler:
    audio = cfg["audio"]
    if no_audio:
        audio["backend"] = "none"
    try:
        return make_scheduler_from_config(cfg)
    except RuntimeError as e:
        print(f"[WARN] Audio unavailable ({e}); continuing without sound.")
        return AudioScheduler(Mixer(audio["sample_rate"]), tone=Tone(audio["tone"]), lookahead=audio["lookahead_s"])


def _load_catalog_or_exit(path: Optional[str]) -> ChordCatalog:
    try:
        return load_catalog(path)
    except CatalogError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="chordear", description="Chord identification ear trainer")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    sub = p.add_subparsers(dest="cmd")

    lc = sub.add_parser("list-chords", help="List catalog sections, chords and inversions")
    lc.add_argument("--catalog", default=None, help="Path to chord catalog (YAML/JSON)")

    rp = sub.add_parser("run", help="Interactive exercise session")
    rp.add_argument("--config", default=None, help="Path to YAML config")
    rp.add_argument("--catalog", default=None, help="Path to chord catalog (YAML/JSON)")
    rp.add_argument("--chords", type=int, default=None, help="Chords per exercise (1-16)")
    rp.add_argument("--bpm", type=float, default=None)
    rp.add_argument("--tone", default=None, choices=[t.value for t in Tone])
    rp.add_argument("--roots", default=None, help="Root list, e.g. 'C, Eb, F#'")
    rp.add_argument("--no-autoplay", dest="auto_play", action="store_false", default=None)
    rp.add_argument("--no-audio", action="store_true", help="Run silently")
    rp.add_argument("--explain", action="store_true")

    args = p.parse_args(argv)

    if args.version:
        print(f"chordear {__version__}")
        return 0

    if args.cmd == "list-chords":
        catalog = _load_catalog_or_exit(args.catalog)
        print(f"Default roots: {', '.join(catalog.roots)}")
        for sec in catalog.sections:
            state = "on" if sec.enabled else "off"
            print(f"{sec.id}: {sec.label} [{state}] - {sec.description}")
            for ch in sec.chords:
                print(f"  {sec.id}:{ch.id}  {catalog.chord_display(ch)}  {list(ch.intervals)}")
            print("  inversions: " + ", ".join(f"{inv.id}={inv.label}" for inv in sec.inversions))
        return 0

    if args.cmd == "run":
        seed = seed_if_needed()
        if args.explain:
            explain_enable(True)
        cfg = validate_config(load_config(args.config))
        exercise_cfg = cfg["exercise"]
        if args.chords is not None:
            exercise_cfg["chords"] = args.chords
        if args.bpm is not None:
            exercise_cfg["bpm"] = args.bpm
        if args.roots is not None:
            exercise_cfg["roots"] = args.roots
        if args.auto_play is not None:
            exercise_cfg["auto_play"] = args.auto_play
        if args.tone is not None:
            cfg["audio"]["tone"] = args.tone
        cfg = validate_config(cfg)

        catalog = _load_catalog_or_exit(args.catalog or cfg["catalog"].get("path"))
        scheduler = _make_scheduler(cfg, args.no_audio)
        session = Session(
            catalog,
            scheduler=scheduler,
            settings=SessionSettings.from_config(cfg),
            rng=make_rng(seed),
            root_text=exercise_cfg["roots"],
        )
        run_loop(session, _build_ui())
        return 0

    p.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
