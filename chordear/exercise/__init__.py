"""Exercise pool, generation and grading."""

from .pool import ChordTemplate, TemplatePool  # noqa: F401
from .generator import ConfigNotLoadedError, Exercise, ExerciseGenerator, NothingEnabledError  # noqa: F401
from .grader import Evaluation, Grader, Verdict  # noqa: F401
