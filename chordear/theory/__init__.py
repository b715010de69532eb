"""Theory layer: note names, chord catalog and voicing."""

from .chord import ChordKey, ChordSpec, Guess  # noqa: F401
from .catalog import ChordCatalog, CatalogError  # noqa: F401
from .voicing import voice_chord, is_symmetric_pitch_class_set  # noqa: F401
