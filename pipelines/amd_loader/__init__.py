"""AMD loader generation pipeline."""

from .spec import Spec
from .runner import RunResult, run

__all__ = ["RunResult", "Spec", "run"]
